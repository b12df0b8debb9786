"""Reading, editing and writing docker-compose files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

_STR_TAG = "tag:yaml.org,2002:str"


class _Dumper(yaml.SafeDumper):
    """Dumper that double-quotes strings which would otherwise read as another type."""


def _represent_str(dumper: _Dumper, data: str) -> yaml.ScalarNode:
    implicit = dumper.resolve(yaml.ScalarNode, data, (True, False))
    style = '"' if implicit != _STR_TAG else None
    return dumper.represent_scalar(_STR_TAG, data, style=style)


_Dumper.add_representer(str, _represent_str)


def _default_networks() -> dict[str, Any]:
    return {
        "kool_local": None,
        "kool_global": {
            "external": True,
            "name": "${KOOL_GLOBAL_NETWORK:-kool_global}",
        },
    }


def _mapping(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be a mapping")
    return dict(value)


class ComposeParser:
    """A docker-compose document with version, services, volumes and networks."""

    def __init__(self) -> None:
        self.version = "3.7"
        self.services: dict[str, Any] = {}
        self.volumes: dict[str, Any] = {}
        self.networks: dict[str, Any] = _default_networks()

    def parse(self, content: str) -> None:
        """Replace the document with the one read from content."""
        data = yaml.safe_load(content)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("docker-compose content must be a mapping")

        version = data.get("version")
        services = _mapping(data, "services")
        volumes = _mapping(data, "volumes")
        networks = _mapping(data, "networks")

        self.version = "" if version is None else str(version)
        self.services = services
        self.volumes = volumes
        self.networks = networks

    def set_service(self, name: str, content: Any) -> None:
        """Add a service, or replace the one with the same name in place."""
        self.services[name] = content

    def set_volume(self, volume: str) -> None:
        """Add a named volume unless it is already declared."""
        self.volumes.setdefault(volume, None)

    def dump(self) -> str:
        """Return the document as YAML text."""
        document: dict[str, Any] = {"version": self.version, "services": self.services}
        if self.volumes:
            document["volumes"] = self.volumes
        if self.networks:
            document["networks"] = self.networks
        return yaml.dump(
            document,
            Dumper=_Dumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


@dataclass
class FakeParser:
    """Stand-in parser recording the calls made on it."""

    called_parse: dict[str, bool] = field(default_factory=dict)
    called_set_service: dict[str, bool] = field(default_factory=dict)
    called_set_volume: dict[str, bool] = field(default_factory=dict)
    called_dump: bool = False
    mock_parse_error: Exception | None = None
    mock_dump_error: Exception | None = None

    def parse(self, content: str) -> None:
        self.called_parse[content] = True
        if self.mock_parse_error is not None:
            raise self.mock_parse_error

    def set_service(self, name: str, content: Any) -> None:
        self.called_set_service[name] = True

    def set_volume(self, volume: str) -> None:
        self.called_set_volume[volume] = True

    def dump(self) -> str:
        self.called_dump = True
        if self.mock_dump_error is not None:
            raise self.mock_dump_error
        return ""