"""Connection profile: API server address, TLS material and initial credential.

Profiles are read from a kubeconfig file. Either the current context is
used, or the cluster entry whose server matches a master URL given on the
command line (or in $KUBERNETES_MASTER).
"""

from __future__ import annotations

import base64
import logging
import os
import ssl
import tempfile
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import SplitResult, urlsplit

import yaml

from kubik.constants.values import DEFAULT_NAMESPACE
from kubik.models.state.app_settings import ConfigLoadError

logger = logging.getLogger(__name__)

KUBECONFIG_ENV = "KUBECONFIG"
MASTER_ENV = "KUBERNETES_MASTER"


@dataclass
class ConnectionProfile:
    """Everything needed to reach the API server."""

    server: str
    namespace: str | None = None
    certificate_authority: bytes | None = field(default=None, repr=False)
    client_certificate: bytes | None = field(default=None, repr=False)
    client_key: bytes | None = field(default=None, repr=False)
    token: str | None = field(default=None, repr=False)
    insecure_skip_tls_verify: bool = False

    @property
    def initial_namespace(self) -> str:
        return self.namespace or DEFAULT_NAMESPACE

    def ssl_context(self) -> ssl.SSLContext:
        """Build the TLS context for this profile."""
        context = ssl.create_default_context()
        if self.certificate_authority:
            context.load_verify_locations(
                cadata=self.certificate_authority.decode("utf-8")
            )
        if self.insecure_skip_tls_verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        if self.client_certificate and self.client_key:
            _load_cert_chain(context, self.client_certificate, self.client_key)
        return context


def _load_cert_chain(context: ssl.SSLContext, cert: bytes, key: bytes) -> None:
    """Load in-memory client material; ssl only accepts file paths."""
    with tempfile.TemporaryDirectory(prefix="kubik-") as tmp:
        cert_path = Path(tmp) / "client.crt"
        key_path = Path(tmp) / "client.key"
        cert_path.write_bytes(cert)
        key_path.write_bytes(key)
        with suppress(OSError):
            os.chmod(key_path, 0o600)
        context.load_cert_chain(str(cert_path), str(key_path))


def default_kubeconfig_path() -> Path:
    override = os.environ.get(KUBECONFIG_ENV)
    if override:
        # First entry of a KUBECONFIG list
        return Path(override.split(os.pathsep)[0]).expanduser()
    return Path.home() / ".kube" / "config"


def _read_material(entry: dict[str, Any], key: str) -> bytes | None:
    """Read `<key>-data` (base64) or the file named by `<key>`."""
    data = entry.get(f"{key}-data")
    if data:
        return base64.b64decode(data)
    path = entry.get(key)
    if path:
        try:
            return Path(path).expanduser().read_bytes()
        except OSError as exc:
            raise ConfigLoadError(f"Cannot read {key} file {path}: {exc}") from exc
    return None


def _named(entries: list[dict[str, Any]] | None, name: str | None, key: str) -> dict[str, Any]:
    for entry in entries or []:
        if entry.get("name") == name:
            return entry.get(key) or {}
    return {}


def _same_endpoint(server: SplitResult, wanted: SplitResult) -> bool:
    return server.scheme == wanted.scheme and server.port == wanted.port


def _select_cluster(
    kube: dict[str, Any],
    master: str | None,
) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return (cluster, context) entries for the current context or a master URL."""
    contexts = kube.get("contexts") or []
    clusters = kube.get("clusters") or []

    if not master:
        current = kube.get("current-context")
        if not current:
            raise ConfigLoadError("No current context set in kubeconfig")
        context = _named(contexts, current, "context")
        cluster = _named(clusters, context.get("cluster"), "cluster")
        return cluster, context

    wanted = urlsplit(master)
    matching = [
        item for item in clusters
        if urlsplit((item.get("cluster") or {}).get("server", "")).hostname == wanted.hostname
    ]
    if len(matching) > 1:
        matching = [
            item for item in matching
            if _same_endpoint(urlsplit((item.get("cluster") or {}).get("server", "")), wanted)
        ]
    if len(matching) == 1:
        name = matching[0].get("name")
        context = next(
            (
                item.get("context") or {}
                for item in contexts
                if (item.get("context") or {}).get("cluster") == name
            ),
            {},
        )
        return matching[0].get("cluster") or {}, context
    return {"server": master}, {}


def load_profile(
    master: str | None = None,
    kubeconfig: Path | None = None,
) -> ConnectionProfile:
    """Build a ConnectionProfile from a kubeconfig file.

    Args:
        master: Optional API server URL selecting the cluster entry.
        kubeconfig: Optional kubeconfig path, defaults to $KUBECONFIG or ~/.kube/config.

    Raises:
        ConfigLoadError: When the file is missing, malformed, or names no server.
    """
    master = master or os.environ.get(MASTER_ENV) or None
    if master and not urlsplit(master).hostname:
        raise ConfigLoadError(f"Invalid master URL, expected scheme://host[:port]: {master}")
    path = kubeconfig or default_kubeconfig_path()
    try:
        kube = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except FileNotFoundError:
        if master:
            logger.warning("No kubeconfig at %s, connecting to %s without credentials", path, master)
            return ConnectionProfile(server=master)
        raise ConfigLoadError(f"Kubeconfig not found: {path}") from None
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigLoadError(f"Cannot read kubeconfig {path}: {exc}") from exc

    cluster, context = _select_cluster(kube, master)
    server = cluster.get("server")
    if not server:
        raise ConfigLoadError(f"No server configured for the selected context in {path}")
    user = _named(kube.get("users"), context.get("user"), "user")

    return ConnectionProfile(
        server=server.rstrip("/"),
        namespace=context.get("namespace"),
        certificate_authority=_read_material(cluster, "certificate-authority"),
        client_certificate=_read_material(user, "client-certificate"),
        client_key=_read_material(user, "client-key"),
        token=user.get("token"),
        insecure_skip_tls_verify=bool(cluster.get("insecure-skip-tls-verify", False)),
    )
