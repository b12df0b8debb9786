import pytest

from kool.checker import (
    CheckerError,
    DefaultChecker,
    DockerComposeNotFoundError,
    DockerNotFoundError,
    DockerNotRunningError,
    FakeChecker,
    new_checker,
)
from kool.compose import Command, DockerCompose


class FakeShell:
    def __init__(self, missing=(), failing=()):
        self.missing = set(missing)
        self.failing = set(failing)
        self.called_look_path = {}
        self.called_exec = {}

    def look_path(self, command):
        self.called_look_path[command.cmd()] = True
        return command.cmd() not in self.missing

    def exec(self, command):
        self.called_exec[command.cmd()] = True
        if command.cmd() in self.failing:
            raise OSError("not running")
        return ""


def _checker(shell):
    return DefaultChecker(Command("docker"), Command("docker-compose"), shell)


def test_new_checker():
    shell = FakeShell()
    c = new_checker(shell)
    assert isinstance(c, DefaultChecker)
    assert c.shell is shell
    assert c.docker_cmd.cmd() == "docker"
    assert c.docker_cmd.args() == ["info"]
    assert isinstance(c.docker_compose_cmd, DockerCompose)


def test_docker_not_installed():
    c = _checker(FakeShell(missing={"docker"}))
    with pytest.raises(DockerNotFoundError) as info:
        c.check()
    assert str(info.value) == "docker doesn't seem to be installed, install it first and retry"


def test_docker_compose_not_installed():
    c = _checker(FakeShell(missing={"docker-compose"}))
    with pytest.raises(DockerComposeNotFoundError) as info:
        c.check()
    assert str(info.value) == "docker-compose doesn't seem to be installed, install it first and retry"


def test_docker_not_running():
    c = _checker(FakeShell(failing={"docker"}))
    with pytest.raises(DockerNotRunningError) as info:
        c.check()
    assert str(info.value) == "docker daemon doesn't seem to be running, run it first and retry"
    assert isinstance(info.value, CheckerError)


def test_check_kool_dependencies():
    shell = FakeShell()
    c = _checker(shell)
    c.check()
    assert shell.called_look_path.get("docker") is True
    assert shell.called_look_path.get("docker-compose") is True
    assert shell.called_exec.get("docker") is True


def test_fake_checker():
    f = FakeChecker()
    f.check()
    assert f.called_check is True


def test_failed_fake_checker():
    f = FakeChecker(mock_error=RuntimeError("fake error"))
    with pytest.raises(RuntimeError, match="fake error"):
        f.check()
    assert f.called_check is True