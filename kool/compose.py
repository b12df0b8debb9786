"""Command lines, and docker-compose run directly or inside a container."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, MutableMapping

DOCKER_COMPOSE_IMAGE = "docker/compose:1.28.0"
"""The Docker image:tag used when docker-compose is not installed locally."""

_DEFAULT_DOCKER_HOST = "unix:///var/run/docker.sock"


class Command:
    """An executable together with its arguments."""

    def __init__(self, cmd: str, *args: str) -> None:
        self._cmd = cmd
        self._args = list(args)

    def cmd(self) -> str:
        """Return the executable."""
        return self._cmd

    def args(self) -> list[str]:
        """Return a copy of the arguments."""
        return list(self._args)

    def append_args(self, *args: str) -> None:
        """Add arguments at the end of the command line."""
        self._args.extend(args)

    def copy(self) -> Command:
        """Return an independent copy of this command."""
        return Command(self._cmd, *self._args)

    def __str__(self) -> str:
        return " ".join([self.cmd(), *self.args()]).strip(" ")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.cmd()!r}, args={self.args()!r})"


def _on_path(command: Command) -> bool:
    return shutil.which(command.cmd()) is not None


class DockerCompose(Command):
    """A docker-compose command.

    When docker-compose is on the PATH it runs directly; otherwise it runs
    inside a throwaway container of the docker/compose image.
    """

    def __init__(
        self,
        cmd: str,
        *args: str,
        env: MutableMapping[str, str] | None = None,
        look_path: Callable[[Command], bool] | None = None,
        local_docker_compose: Command | None = None,
        is_tty: bool = False,
    ) -> None:
        super().__init__(cmd, *args)
        self.env = os.environ if env is None else env
        self.look_path = look_path or _on_path
        self.local_docker_compose = local_docker_compose or Command("docker-compose")
        self.is_tty = is_tty

    def _has_local(self) -> bool:
        return bool(self.look_path(self.local_docker_compose))

    def cmd(self) -> str:
        """Return the executable: docker-compose if installed, else docker."""
        return "docker-compose" if self._has_local() else "docker"

    def args(self) -> list[str]:
        """Return the arguments for the executable given by cmd()."""
        inner = [super().cmd(), *super().args()]
        if self._has_local():
            return inner

        args = ["run", "--rm", "-i"]
        if self.is_tty:
            args.append("-t")

        docker_host = self.env.get("DOCKER_HOST", "")
        if not docker_host:
            docker_host = _DEFAULT_DOCKER_HOST
            self.env["DOCKER_HOST"] = docker_host

        if docker_host.startswith("unix://"):
            socket = docker_host.removeprefix("unix://")
            args += ["-v", f"{socket}:{socket}", "-e", "DOCKER_HOST"]
        else:
            args += ["-e", "DOCKER_HOST", "-e", "DOCKER_TLS_VERIFY", "-e", "DOCKER_CERT_PATH"]

        cwd = os.getcwd()
        if cwd != "/":
            args += ["-v", f"{cwd}:{cwd}"]
        args += ["-w", cwd]

        home = self.env.get("HOME", "")
        if home:
            args += ["-v", f"{home}:{home}", "-e HOME"]

        for key in list(self.env):
            if key == "PATH":
                continue
            args += ["-e", key]

        args += [DOCKER_COMPOSE_IMAGE, "-p", self.env.get("KOOL_NAME", "")]
        return args + inner

    def copy(self) -> DockerCompose:
        """Return an independent copy keeping the TTY setting."""
        return DockerCompose(
            super().cmd(),
            *super().args(),
            env=self.env,
            look_path=self.look_path,
            local_docker_compose=self.local_docker_compose,
            is_tty=self.is_tty,
        )