"""vault-secrets-injector: Vault secrets for Kubernetes pods without Vault-aware images.

This package provides a mutating admission webhook that makes pods start
through vault-env, and the vault-env runtime that resolves ``vault:<key>``
environment values before handing over to the real command.

Example usage:
    from vault_injector import mutate_pod

    result = mutate_pod(pod)
    if result.mutated:
        submit(result.pod)
"""

__version__ = "1.1.0"

from vault_injector.cli import vault_env, webhook
from vault_injector.exceptions import (
    AuthenticationError,
    ConfigurationError,
    LaunchError,
    MissingAnnotationError,
    SecretResolutionError,
    SecretRetrievalError,
    VaultInjectorError,
)
from vault_injector.models import LaunchPlan, MutationResult, SecretInjectionConfig
from vault_injector.runtime.runner import prepare_launch
from vault_injector.webhook.mutator import mutate_pod

__all__ = [
    # Version
    "__version__",
    # CLI entry points
    "vault_env",
    "webhook",
    # Core operations
    "mutate_pod",
    "prepare_launch",
    # Models
    "LaunchPlan",
    "MutationResult",
    "SecretInjectionConfig",
    # Exceptions
    "VaultInjectorError",
    "ConfigurationError",
    "MissingAnnotationError",
    "AuthenticationError",
    "SecretRetrievalError",
    "SecretResolutionError",
    "LaunchError",
]
