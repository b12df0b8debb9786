"""Sending a release tarball to the Kool cloud and following its deployment."""

from __future__ import annotations

import os
import uuid
from collections.abc import Mapping
from typing import Any

from kool.api_errors import (
    ApiResponseError,
    BadResponseStatusError,
    DeployFailedError,
    PayloadValidationError,
    UnauthorizedError,
    UnexpectedResponseError,
)
from kool.calls import StatusCall, StatusResponse
from kool.endpoint import Endpoint

_OPTIONAL_FIELDS = (
    ("domain", "KOOL_DEPLOY_DOMAIN"),
    ("domain_extras", "KOOL_DEPLOY_DOMAIN_EXTRAS"),
    ("www_redirect", "KOOL_DEPLOY_WWW_REDIRECT"),
)


def _multipart(
    file_field: str,
    filename: str,
    content: bytes,
    fields: list[tuple[str, str]],
) -> tuple[bytes, str]:
    """Encode a file and form fields as multipart/form-data."""
    boundary = uuid.uuid4().hex
    crlf = b"\r\n"
    delimiter = b"--" + boundary.encode()
    chunks = [
        delimiter,
        f'Content-Disposition: form-data; name="{file_field}"; filename="{filename}"'.encode(),
        b"Content-Type: application/octet-stream",
        b"",
        content,
    ]
    for name, value in fields:
        chunks += [
            delimiter,
            f'Content-Disposition: form-data; name="{name}"'.encode(),
            b"",
            value.encode(),
        ]
    chunks.append(delimiter + b"--")
    body = crlf.join(chunks) + crlf
    return body, f"multipart/form-data; boundary={boundary}"


class Deploy(Endpoint):
    """A deployment, from uploading the tarball to retrieving the public URL."""

    def __init__(
        self,
        tarball_path: str,
        *,
        env: Mapping[str, str] | None = None,
        session: Any = None,
    ) -> None:
        super().__init__("POST", env=env, session=session)
        self.tarball_path = tarball_path
        self.deploy_id = ""
        self.status: StatusResponse | None = None

    def _payload(self) -> tuple[bytes, str]:
        with open(self.tarball_path, "rb") as tarball:
            content = tarball.read()
        print(f"Release tarball got {len(content) / 1024 / 1024:.2f}MBs...")

        fields = [
            (name, value)
            for name, variable in _OPTIONAL_FIELDS
            if (value := self.env.get(variable, ""))
        ]
        return _multipart("deploy", "deploy.tgz", content, fields)

    def send_file(self) -> None:
        """Upload the tarball to deploy/create and remember the deployment id."""
        self.raw_body, self.content_type = self._payload()
        self.path = "deploy/create"

        try:
            data = self.do_call()
        except ApiResponseError as err:
            if err.status == 401:
                raise UnauthorizedError() from err
            if err.status == 422:
                raise PayloadValidationError() from err
            if err.status not in (200, 201):
                raise BadResponseStatusError() from err
            raise

        if not isinstance(data, dict):
            raise UnexpectedResponseError(
                f"{UnexpectedResponseError.message} (parse error: expected a JSON object)"
            )
        deploy_id = data.get("id", 0)
        if deploy_id is None:
            deploy_id = 0
        if isinstance(deploy_id, bool) or not isinstance(deploy_id, int):
            raise UnexpectedResponseError(
                f"{UnexpectedResponseError.message} (parse error: 'id' must be an integer)"
            )

        self.deploy_id = str(deploy_id)
        if self.deploy_id == "0":
            raise UnexpectedResponseError("unexpected API response, please ask for support")

    def fetch_latest_status(self) -> None:
        """Refresh the deployment status; raise DeployFailedError if it failed."""
        self.status = StatusCall(self.deploy_id, env=self.env, session=self.session).call()
        if self.status.status == "failed":
            raise DeployFailedError()

    def is_successful(self) -> bool:
        """Tell whether the deployment finished successfully."""
        return self.status is not None and self.status.status == "success"

    def url(self) -> str:
        """Return the public URL of a finished deployment."""
        return "" if self.status is None else self.status.url


def _file_size(path: str) -> int:
    return os.stat(path).st_size