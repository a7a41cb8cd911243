# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Execution of dexec invocation plans through the docker command line.
"""
import logging
import shutil
import subprocess
import sys
from typing import List, Optional

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..errors import PullError
from ..MODELS.invocation import InvocationPlan
from ..MODELS.settings import DexecSettings

logger = logging.getLogger(__name__)


class DockerRunner:
    """
    Runs anonymous dexec containers with the docker binary.
    """
    def __init__(self, settings: Optional[DexecSettings] = None, tty: Optional[bool] = None):
        """
        Initializes the runner.

        Args:
            settings (Optional[DexecSettings]): Docker binary and pull retry settings.
            tty (Optional[bool]): Allocate a pseudo-TTY. Detected from stdin when None.
        """
        self.settings = settings or DexecSettings()
        self.tty = sys.stdin.isatty() if tty is None else tty

    @property
    def docker(self) -> str:
        """Docker binary used for every command."""
        return self.settings.docker_bin

    def is_present(self) -> bool:
        """
        Checks whether the docker binary can be found and executed.
        """
        if shutil.which(self.docker) is None:
            return False
        return self._succeeds([self.docker, "--version"])

    def is_running(self) -> bool:
        """
        Checks whether the docker daemon answers.
        """
        return self._succeeds([self.docker, "info"])

    def pull(self, image_reference: str):
        """
        Pulls an image, retrying with exponential backoff.

        Args:
            image_reference (str): Image such as ``dexec/python``.

        Raises:
            PullError: If every attempt failed.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self.settings.pull_attempts),
            wait=wait_exponential(multiplier=self.settings.pull_backoff),
            retry=retry_if_exception_type(PullError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        retrying(self._pull_once, image_reference)

    def command_for(self, plan: InvocationPlan) -> List[str]:
        """
        Builds the ``docker run`` command for a plan.

        Args:
            plan (InvocationPlan): The resolved invocation.

        Returns:
            List[str]: Command and arguments.
        """
        command = [self.docker, "run", "--rm", "-i"]
        if self.tty:
            command.append("-t")
        return command + plan.docker_args + [plan.image_reference] + plan.entrypoint_args

    def run(self, plan: InvocationPlan) -> int:
        """
        Runs the container with the caller's stdio attached.

        Returns:
            int: The container's exit code.
        """
        command = self.command_for(plan)
        logger.info("Running: %s", " ".join(command))
        result = subprocess.run(command, shell=False)
        return result.returncode

    def execute(self, plan: InvocationPlan) -> int:
        """
        Pulls the image first if the plan asks for it, then runs the container.
        """
        if plan.pull_first:
            self.pull(plan.image_reference)
        return self.run(plan)

    def _pull_once(self, image_reference: str):
        command = [self.docker, "pull", image_reference]
        logger.info("Running: %s", " ".join(command))
        result = subprocess.run(command, shell=False)
        if result.returncode != 0:
            raise PullError(image_reference, result.returncode)

    @staticmethod
    def _succeeds(command: List[str]) -> bool:
        try:
            result = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                shell=False,
            )
        except OSError as e:
            logger.debug("%s failed: %s", command[0], e)
            return False
        return result.returncode == 0
