"""Data models for vault-secrets-injector.

Pods themselves are handled as plain JSON documents; the types here describe
what the webhook and the runtime derive from them.
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple


@dataclass(frozen=True, slots=True)
class SecretInjectionConfig:
    """Injection settings read from a pod's annotations.

    Attributes:
        address: Vault server address.
        role: Vault Kubernetes auth role to log in with.
        path: Path of the secret to read.
        tls_secret_name: Kubernetes secret holding the Vault CA bundle.
        enabled: Whether injection was requested for the pod.

    """

    address: str = ""
    role: str = ""
    path: str = ""
    tls_secret_name: str = ""
    enabled: bool = False


class MutationResult(NamedTuple):
    """Outcome of running the mutation engine on a pod.

    Attributes:
        pod: The resulting pod document. When ``mutated`` is False this is the
            object that was passed in.
        mutated: Whether any container was rewritten.

    """

    pod: dict[str, Any]
    mutated: bool


@dataclass(frozen=True, slots=True)
class LaunchPlan:
    """Everything needed to hand the process over to the target program.

    Attributes:
        binary: Absolute path of the program to execute.
        argv: Argument vector, starting with the program name as given.
        environ: Sanitized environment for the program.

    """

    binary: str
    argv: tuple[str, ...]
    environ: dict[str, str] = field(default_factory=dict, repr=False)
