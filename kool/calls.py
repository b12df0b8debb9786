"""Typed calls to the deploy status, exec and destroy API endpoints."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from kool.api_errors import UnexpectedResponseError
from kool.endpoint import Endpoint


def _invalid(reason: str) -> UnexpectedResponseError:
    return UnexpectedResponseError(f"{UnexpectedResponseError.message} (parse error: {reason})")


def _object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise _invalid("expected a JSON object")
    return data


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _invalid(f"'{key}' must be a string")
    return value


def _integer(data: dict[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise _invalid(f"'{key}' must be an integer")
    return value


@dataclass(frozen=True)
class StatusResponse:
    """State of a deployment and, once done, its public URL."""

    status: str = ""
    url: str = ""

    @classmethod
    def from_json(cls, data: Any) -> StatusResponse:
        obj = _object(data)
        return cls(status=_string(obj, "status"), url=_string(obj, "url"))


@dataclass(frozen=True)
class ExecResponse:
    """Cluster access credentials returned by the exec endpoint."""

    server: str = ""
    namespace: str = ""
    path: str = ""
    token: str = ""
    ca: str = ""

    @classmethod
    def from_json(cls, data: Any) -> ExecResponse:
        obj = _object(data)
        return cls(
            server=_string(obj, "server"),
            namespace=_string(obj, "namespace"),
            path=_string(obj, "path"),
            token=_string(obj, "token"),
            ca=_string(obj, "ca.crt"),
        )


@dataclass(frozen=True)
class DestroyResponse:
    """Identifier of the environment that was destroyed."""

    environment_id: int = 0

    @classmethod
    def from_json(cls, data: Any) -> DestroyResponse:
        obj = _object(data)
        environment = obj.get("environment")
        if environment is None:
            return cls()
        return cls(environment_id=_integer(_object(environment), "id"))


class StatusCall(Endpoint):
    """GET deploy/<id>/status."""

    def __init__(
        self,
        deploy_id: str,
        *,
        env: Mapping[str, str] | None = None,
        session: Any = None,
    ) -> None:
        super().__init__("GET", env=env, session=session)
        self.deploy_id = deploy_id

    def call(self) -> StatusResponse:
        """Fetch the deployment's current status."""
        self.path = f"deploy/{self.deploy_id}/status"
        return StatusResponse.from_json(self.do_call())


class ExecCall(Endpoint):
    """POST deploy/exec."""

    def __init__(self, *, env: Mapping[str, str] | None = None, session: Any = None) -> None:
        super().__init__("POST", env=env, session=session)

    def call(self) -> ExecResponse:
        """Request credentials for running commands in the cluster."""
        self.path = "deploy/exec"
        return ExecResponse.from_json(self.do_call())


class DestroyCall(Endpoint):
    """DELETE deploy."""

    def __init__(self, *, env: Mapping[str, str] | None = None, session: Any = None) -> None:
        super().__init__("DELETE", env=env, session=session)

    def call(self) -> DestroyResponse:
        """Destroy the deployed environment."""
        self.path = "deploy"
        return DestroyResponse.from_json(self.do_call())