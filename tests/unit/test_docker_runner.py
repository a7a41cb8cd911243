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
Unit tests for the docker runner.
"""
import subprocess
import pytest
from dexec.errors import PullError
from dexec.MODELS.invocation import InvocationPlan, MountDescriptor
from dexec.MODELS.settings import DexecSettings
from dexec.RUNNERS import docker_runner
from dexec.RUNNERS.docker_runner import DockerRunner


class FakeRun:
    """Records commands and returns queued exit codes."""

    def __init__(self, *returncodes):
        self.returncodes = list(returncodes)
        self.commands = []

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        code = self.returncodes.pop(0) if self.returncodes else 0
        return subprocess.CompletedProcess(command, code)


@pytest.fixture
def plan():
    return InvocationPlan(
        image="python",
        image_reference="dexec/python",
        working_dir="/src",
        mounts=[
            MountDescriptor(basename="main.py", host_path="/src/main.py",
                            container_path="/tmp/dexec/build/main.py"),
            MountDescriptor(basename="lib.py", host_path="/src/lib.py",
                            container_path="/tmp/dexec/build/lib.py:ro", permission="ro"),
        ],
        entrypoint_args=["main.py", "-a", "--flag"],
    )


@pytest.fixture
def runner():
    return DockerRunner(DexecSettings(pull_attempts=3, pull_backoff=0), tty=False)


class TestDockerRunner:
    """Tests for DockerRunner."""

    def test_command_for(self, runner, plan):
        """Test the docker run command layout."""
        assert runner.command_for(plan) == [
            "docker", "run", "--rm", "-i",
            "-v", "/src/main.py:/tmp/dexec/build/main.py",
            "-v", "/src/lib.py:/tmp/dexec/build/lib.py:ro",
            "dexec/python", "main.py", "-a", "--flag",
        ]

    def test_command_for_tty(self, plan):
        """Test that a TTY is requested when attached to a terminal."""
        runner = DockerRunner(DexecSettings(docker_bin="podman"), tty=True)
        assert runner.command_for(plan)[:5] == ["podman", "run", "--rm", "-i", "-t"]

    def test_run_returns_exit_code(self, runner, plan, monkeypatch):
        """Test that the container exit code is returned."""
        fake = FakeRun(3)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        assert runner.run(plan) == 3
        assert fake.commands == [runner.command_for(plan)]

    def test_execute_without_pull(self, runner, plan, monkeypatch):
        """Test that no pull happens unless requested."""
        fake = FakeRun(0)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        runner.execute(plan)
        assert len(fake.commands) == 1
        assert fake.commands[0][1] == "run"

    def test_execute_pulls_first(self, runner, plan, monkeypatch):
        """Test that the image is pulled before running when requested."""
        fake = FakeRun(0, 0)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        runner.execute(plan.model_copy(update={"pull_first": True}))
        assert fake.commands[0] == ["docker", "pull", "dexec/python"]
        assert fake.commands[1][1] == "run"

    def test_pull_retries(self, runner, monkeypatch):
        """Test that failed pulls are retried."""
        fake = FakeRun(1, 1, 0)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        runner.pull("dexec/go")
        assert len(fake.commands) == 3

    def test_pull_gives_up(self, runner, monkeypatch):
        """Test that a pull failing every attempt raises PullError."""
        fake = FakeRun(1, 1, 1, 1)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        with pytest.raises(PullError) as exc_info:
            runner.pull("dexec/go")
        assert exc_info.value.returncode == 1
        assert len(fake.commands) == 3

    def test_failed_pull_prevents_run(self, runner, plan, monkeypatch):
        """Test that the container is not started when the pull fails."""
        fake = FakeRun(1, 1, 1)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        with pytest.raises(PullError):
            runner.execute(plan.model_copy(update={"pull_first": True}))
        assert all(command[1] == "pull" for command in fake.commands)

    def test_is_present_without_binary(self, runner, monkeypatch):
        """Test that a missing binary means docker is not present."""
        monkeypatch.setattr(docker_runner.shutil, "which", lambda name: None)
        assert runner.is_present() is False

    def test_is_present(self, runner, monkeypatch):
        """Test that a working binary means docker is present."""
        monkeypatch.setattr(docker_runner.shutil, "which", lambda name: "/usr/bin/docker")
        monkeypatch.setattr(docker_runner.subprocess, "run", FakeRun(0))
        assert runner.is_present() is True

    def test_is_running(self, runner, monkeypatch):
        """Test daemon detection through docker info."""
        fake = FakeRun(1)
        monkeypatch.setattr(docker_runner.subprocess, "run", fake)
        assert runner.is_running() is False
        assert fake.commands == [["docker", "info"]]

    def test_is_running_binary_error(self, runner, monkeypatch):
        """Test that an OS error while probing is reported as not running."""
        def boom(command, **kwargs):
            raise FileNotFoundError(command[0])
        monkeypatch.setattr(docker_runner.subprocess, "run", boom)
        assert runner.is_running() is False

    def test_docker_binary_from_settings(self):
        """Test that the configured binary is used."""
        runner = DockerRunner(DexecSettings(docker_bin="/opt/bin/docker"), tty=False)
        assert runner.docker == "/opt/bin/docker"
