"""Vault session handling for vault-env.

This module logs into Vault with the pod's service account token through the
Kubernetes auth method and reads the configured secret. Every call is made
once; failures surface as typed errors and are never retried.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import hvac
import requests
from hvac.exceptions import InvalidPath, VaultError
from icecream import ic

from vault_injector import console
from vault_injector.constants import (
    DEFAULT_VAULT_ADDR,
    KUBERNETES_AUTH_MOUNT_POINT,
    SERVICE_ACCOUNT_TOKEN_PATH,
)
from vault_injector.exceptions import (
    AuthenticationError,
    SecretNotFoundError,
    SecretReadError,
    ServiceAccountTokenError,
)
from vault_injector.parsing import parse_bool


@dataclass(frozen=True, slots=True)
class VaultSettings:
    """Vault client configuration taken from the standard VAULT_* variables.

    Attributes:
        address: Vault server URL.
        verify: CA bundle path, or a boolean toggling certificate verification.
        client_cert: Optional (certificate, key) pair for TLS client auth.
        namespace: Optional Vault Enterprise namespace.
        timeout: Request timeout in seconds, or None for the client default.

    """

    address: str = DEFAULT_VAULT_ADDR
    verify: str | bool = True
    client_cert: tuple[str, str] | None = None
    namespace: str | None = None
    timeout: int | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "VaultSettings":
        """Build settings the way the Vault CLI reads its environment.

        Args:
            environ: Process environment.

        Returns:
            The resolved settings.

        """
        verify: str | bool = environ.get("VAULT_CACERT") or environ.get("VAULT_CAPATH") or True
        if parse_bool(environ.get("VAULT_SKIP_VERIFY")):
            verify = False

        client_cert = None
        if environ.get("VAULT_CLIENT_CERT") and environ.get("VAULT_CLIENT_KEY"):
            client_cert = (environ["VAULT_CLIENT_CERT"], environ["VAULT_CLIENT_KEY"])

        timeout = None
        raw_timeout = environ.get("VAULT_CLIENT_TIMEOUT", "").rstrip("s")
        if raw_timeout.isdigit():
            timeout = int(raw_timeout)

        return cls(
            address=environ.get("VAULT_ADDR") or DEFAULT_VAULT_ADDR,
            verify=verify,
            client_cert=client_cert,
            namespace=environ.get("VAULT_NAMESPACE") or None,
            timeout=timeout,
        )


def read_service_account_token(token_path: str = SERVICE_ACCOUNT_TOKEN_PATH) -> str:
    """Read the Kubernetes service account token mounted into the pod.

    Args:
        token_path: Location of the projected token file.

    Returns:
        The JWT with surrounding whitespace removed.

    Raises:
        ServiceAccountTokenError: If the file cannot be read.

    """
    console.step("Getting service account token")
    try:
        with open(token_path) as stream:
            return stream.read().strip()
    except OSError as err:
        raise ServiceAccountTokenError(f"Failed to read service account token file: {err}") from err


def create_client(settings: VaultSettings) -> hvac.Client:
    """Create an unauthenticated Vault client."""
    kwargs: dict[str, Any] = {
        "url": settings.address,
        "verify": settings.verify,
        "cert": settings.client_cert,
        "namespace": settings.namespace,
        "session": requests.Session(),
    }
    if settings.timeout is not None:
        kwargs["timeout"] = settings.timeout
    ic(settings)
    return hvac.Client(**kwargs)


def login(role: str, settings: VaultSettings, *, token_path: str = SERVICE_ACCOUNT_TOKEN_PATH) -> hvac.Client:
    """Log into Vault with the Kubernetes auth method.

    Args:
        role: Vault role bound to the pod's service account.
        settings: Vault client settings.
        token_path: Location of the service account token.

    Returns:
        A client holding the issued Vault token.

    Raises:
        ServiceAccountTokenError: If the service account token is unreadable.
        AuthenticationError: If Vault is unreachable or rejects the login.

    """
    console.action(f"Logging into Vault Kubernetes backend using the role: {console.highlight(role)}")
    jwt = read_service_account_token(token_path)
    client = create_client(settings)

    try:
        with console.spinner("Requesting Vault token..."):
            client.auth.kubernetes.login(role=role, jwt=jwt, mount_point=KUBERNETES_AUTH_MOUNT_POINT)
    except (VaultError, requests.exceptions.RequestException) as err:
        raise AuthenticationError(f"Failed to request new Vault token: {err}") from err

    return client


def read_secret(client: hvac.Client, path: str) -> dict[str, Any]:
    """Read the secret stored at ``path``.

    Args:
        client: An authenticated Vault client.
        path: Logical path of the secret, e.g. ``secret/data/app``.

    Returns:
        The ``data`` field of the Vault response.

    Raises:
        SecretNotFoundError: If nothing is stored at the path.
        SecretReadError: If the request fails.

    """
    console.action(f"Getting Vault secrets from path: {console.highlight(path)}")
    try:
        with console.spinner("Reading secret..."):
            response = client.read(path.lstrip("/"))
    except InvalidPath as err:
        raise SecretNotFoundError(path) from err
    except (VaultError, requests.exceptions.RequestException) as err:
        raise SecretReadError(f"Failed to read secret '{path}': {err}") from err

    if not isinstance(response, Mapping) or not isinstance(response.get("data"), Mapping):
        raise SecretNotFoundError(path)
    return dict(response["data"])
