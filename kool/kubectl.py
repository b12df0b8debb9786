"""Access to the deployment's Kubernetes cluster through kubectl."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Callable
from typing import Any

from kool.calls import ExecCall, ExecResponse
from kool.compose import Command

_CA_FILENAME = ".kool-cluster-CA"
_TOOLKIT_IMAGE = "kooldev/toolkit:full"


class K8S:
    """Authenticates against the cloud cluster and builds kubectl commands."""

    def __init__(self, api_exec: Any = None, auth_temp_path: str | None = None) -> None:
        self.api_exec = ExecCall() if api_exec is None else api_exec
        self.auth_temp_path = tempfile.gettempdir() if auth_temp_path is None else auth_temp_path
        self._credentials: ExecResponse | None = None

    @property
    def ca_path(self) -> str:
        """Path of the temporary file holding the cluster CA certificate."""
        return os.path.join(self.auth_temp_path, _CA_FILENAME)

    def authenticate(self, domain: str, service: str) -> str:
        """Fetch cluster credentials and return the cloud service path."""
        self.api_exec.body["domain"] = domain
        self.api_exec.body["service"] = service

        self._credentials = self.api_exec.call()
        if not self._credentials.token:
            raise RuntimeError("failed to generate access credentials to cloud deploy")

        with open(self.ca_path, "w", encoding="utf-8") as ca_file:
            ca_file.write(self._credentials.ca)
        return self._credentials.path

    def kubectl(self, look_path: Callable[[Command], bool]) -> Command:
        """Return a kubectl command bound to the cluster.

        When kubectl is not available it runs inside a toolkit container.
        """
        if self._credentials is None:
            raise RuntimeError("calling kubectl but did not authenticate")

        kube = Command("kubectl")
        kube.append_args("--server", self._credentials.server)
        kube.append_args("--token", self._credentials.token)
        kube.append_args("--namespace", self._credentials.namespace)
        kube.append_args("--certificate-authority", self.ca_path)

        if look_path(kube):
            return kube

        kool = Command("kool")
        kool.append_args(
            "docker",
            "--",
            "-v",
            f"{self.ca_path}:{self.ca_path}",
            _TOOLKIT_IMAGE,
            kube.cmd(),
        )
        kool.append_args(*kube.args())
        return kool

    def cleanup(self, out: Any) -> None:
        """Remove the CA file, warning through out when that fails."""
        try:
            os.remove(self.ca_path)
        except OSError as err:
            out.warning("failed to clear up temporary file; error:", str(err))