"""Checks that the Docker tooling kool depends on is available."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from kool.compose import Command, DockerCompose


class CheckerError(Exception):
    """A required dependency is missing or unusable."""

    message = "dependency check failed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class DockerNotFoundError(CheckerError):
    message = "docker doesn't seem to be installed, install it first and retry"


class DockerComposeNotFoundError(CheckerError):
    message = "docker-compose doesn't seem to be installed, install it first and retry"


class DockerNotRunningError(CheckerError):
    message = "docker daemon doesn't seem to be running, run it first and retry"


class DefaultChecker:
    """Checks docker and docker-compose through a shell.

    The shell needs look_path(command) returning whether the command's
    executable is available, and exec(command) raising when it fails.
    """

    def __init__(self, docker_cmd: Command, docker_compose_cmd: Command, shell: Any) -> None:
        self.docker_cmd = docker_cmd
        self.docker_compose_cmd = docker_compose_cmd
        self.shell = shell

    def check(self) -> None:
        """Raise a CheckerError describing the first problem found."""
        if not self.shell.look_path(self.docker_cmd):
            raise DockerNotFoundError()
        if not self.shell.look_path(self.docker_compose_cmd):
            raise DockerComposeNotFoundError()
        try:
            self.shell.exec(self.docker_cmd)
        except Exception as err:
            raise DockerNotRunningError() from err


@dataclass
class FakeChecker:
    """Stand-in checker recording whether it was used."""

    called_check: bool = False
    mock_error: Exception | None = None

    def check(self) -> None:
        self.called_check = True
        if self.mock_error is not None:
            raise self.mock_error


def new_checker(shell: Any) -> DefaultChecker:
    """Return a checker for `docker info` and `docker-compose ps`."""
    return DefaultChecker(Command("docker", "info"), DockerCompose("ps"), shell)