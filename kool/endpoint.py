"""Generic calls against the Kool cloud API."""

from __future__ import annotations

import json
import os
import re
import sys
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

import requests

from kool.api_errors import ApiResponseError, MissingTokenError, UnexpectedResponseError

DEFAULT_BASE_URL = "https://kool.dev/api"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_api_base_url = DEFAULT_BASE_URL

_METHOD_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def set_base_url(url: str) -> None:
    """Set the Kool API URL used by every endpoint."""
    global _api_base_url
    _api_base_url = url


def _encode(values: Mapping[str, Any]) -> str:
    return urlencode(sorted(values.items()), doseq=True)


def _is_true(value: str) -> bool:
    return value.strip().lower() in {"1", "true"}


def _parse_error(err: Exception) -> UnexpectedResponseError:
    return UnexpectedResponseError(f"{UnexpectedResponseError.message} (parse error: {err})")


class Endpoint:
    """A single API endpoint: method, path, query, body and last status."""

    def __init__(
        self,
        method: str,
        *,
        env: Mapping[str, str] | None = None,
        session: Any = None,
    ) -> None:
        self.method = method
        self.path = ""
        self.content_type = ""
        self.query: dict[str, Any] = {}
        self.raw_body: Any = None
        self.status_code = 0
        self.env = os.environ if env is None else env
        self.session = requests.Session() if session is None else session
        self._body: dict[str, Any] | None = None

    @property
    def body(self) -> dict[str, Any]:
        """Form fields sent with a POST when no raw body is set."""
        if self._body is None:
            self._body = {}
        return self._body

    def do_call(self) -> Any:
        """Perform the request and return the decoded JSON response.

        Raises MissingTokenError without a KOOL_API_TOKEN, ApiResponseError
        for error statuses and UnexpectedResponseError for undecodable bodies.
        """
        verbose = _is_true(self.env.get("KOOL_VERBOSE", ""))
        method = self.method or "GET"

        data: Any = None
        if method == "POST":
            if self.raw_body is not None:
                data = self.raw_body
            elif self._body is not None:
                data = _encode(self._body)
                self.content_type = FORM_CONTENT_TYPE

        url = f"{_api_base_url}/{self.path}?{_encode(self.query)}"
        if verbose:
            print(f"api - calling URL: {url}", file=sys.stderr)

        if not _METHOD_RE.match(method):
            raise ValueError(f"invalid method {method!r}")

        headers: dict[str, str] = {}
        if self.content_type:
            headers["Content-Type"] = self.content_type

        response = self._send(method, url, data, headers)
        try:
            self.status_code = response.status_code
            raw = response.content
        finally:
            response.close()

        if verbose:
            text = raw.decode(errors="replace") if isinstance(raw, bytes) else str(raw)
            print(f"api - got response: {text}", file=sys.stderr)

        try:
            decoded = json.loads(raw)
        except ValueError as err:
            raise _parse_error(err) from err

        if self.status_code >= 400:
            if not isinstance(decoded, dict):
                raise _parse_error(ValueError("expected a JSON object"))
            message = decoded.get("message") or ""
            errors = decoded.get("errors")
            if errors is not None and not isinstance(errors, dict):
                raise _parse_error(ValueError("'errors' must be a JSON object"))
            raise ApiResponseError(self.status_code, str(message), errors)

        return decoded

    def _send(self, method: str, url: str, data: Any, headers: dict[str, str]) -> Any:
        token = self.env.get("KOOL_API_TOKEN", "")
        if not token:
            raise MissingTokenError()
        headers["Accept"] = "application/json"
        headers["Authorization"] = f"Bearer {token}"
        return self.session.request(method, url, data=data, headers=headers)