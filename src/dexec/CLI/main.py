"""
Command Line Interface for dexec.
"""
import logging
from typing import Optional, Sequence

import click

from .. import __version__
from ..BUILDERS.invocation_builder import InvocationBuilder
from ..errors import DexecError
from ..MANAGERS.environment_manager import EnvironmentManager
from ..MODELS.options import OptionSet, OptionType
from ..RUNNERS.docker_runner import DockerRunner

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def build_option_set(sources: Sequence[str],
                     includes: Sequence[str] = (),
                     build_args: Sequence[str] = (),
                     args: Sequence[str] = (),
                     target_dir: Optional[str] = None,
                     update: bool = False) -> OptionSet:
    """
    Converts parsed command-line values into the option mapping used by the builder.
    """
    options: OptionSet = {
        OptionType.SOURCE: list(sources),
        OptionType.INCLUDE: list(includes),
        OptionType.BUILD_ARG: list(build_args),
        OptionType.ARG: list(args),
    }
    if target_dir is not None:
        options[OptionType.TARGET_DIR] = [target_dir]
    if update:
        options[OptionType.UPDATE_FLAG] = ["true"]
    return options


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument('sources', nargs=-1)
@click.option('--include', '-i', 'includes', multiple=True, metavar='PATH',
              help='Extra file or directory to mount, optionally suffixed with :ro or :rw')
@click.option('--build-arg', '-b', 'build_args', multiple=True, metavar='ARG',
              help='Argument passed to the compiler')
@click.option('--arg', '-a', 'args', multiple=True, metavar='ARG',
              help='Argument passed to the compiled program')
@click.option('--chdir', '-C', 'target_dir', default=None, metavar='DIR',
              help='Directory containing the sources (defaults to the current directory)')
@click.option('--update', '-u', is_flag=True, help='Pull the latest image before running')
@click.option('--dry-run', is_flag=True, help='Print the docker command instead of running it')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(__version__, '--version', '-v', prog_name='dexec')
@click.pass_context
def cli(ctx, sources, includes, build_args, args, target_dir, update, dry_run, debug):
    """
    Run SOURCES in an ephemeral Docker container picked from the file extension.

    \b
    Examples:
      dexec main.py -a --verbose
      dexec app.rs -i lib.rs:ro
    """
    if not sources:
        click.echo(ctx.get_help())
        ctx.exit(0)

    try:
        settings = EnvironmentManager().load_settings()
    except DexecError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(
        level=logging.DEBUG if debug else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )

    runner = DockerRunner(settings)
    if not dry_run:
        if not runner.is_present():
            raise click.ClickException("Docker not found")
        if not runner.is_running():
            raise click.ClickException("Docker not running")

    options = build_option_set(sources, includes, build_args, args, target_dir, update)
    try:
        plan = InvocationBuilder().build(options)
        if dry_run:
            click.echo(" ".join(runner.command_for(plan)))
            return
        exit_code = runner.execute(plan)
    except DexecError as e:
        raise click.ClickException(str(e)) from e

    ctx.exit(exit_code)


def main():
    """
    Main entry point for the CLI.
    """
    cli()


if __name__ == '__main__':
    main()
