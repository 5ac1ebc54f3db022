"""Custom exceptions for vault-secrets-injector.

This module defines the exception hierarchy shared by the admission webhook
and the vault-env runtime. Internal functions raise these; only the outermost
boundaries (CLI commands, the admission handler) turn them into an exit
status or an admission decision.
"""


class VaultInjectorError(Exception):
    """Base exception for all vault-secrets-injector errors."""

    pass


class ConfigurationError(VaultInjectorError):
    """Raised when required configuration is missing or invalid.

    Configuration errors are always detected before any network call.
    """

    pass


class MissingAnnotationError(ConfigurationError):
    """Raised when a pod enables injection but lacks a required annotation.

    Attributes:
        annotation: The name of the missing pod annotation.
        description: Human readable name of the setting it carries.

    """

    def __init__(self, annotation: str, description: str) -> None:
        self.annotation = annotation
        self.description = description
        super().__init__(
            f'Error getting vault {description} - make sure you set the annotation "{annotation}"'
        )


class MissingEnvironmentError(ConfigurationError):
    """Raised when vault-env is started without a required environment variable."""

    def __init__(self, variable: str) -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is missing")


class ManifestParsingError(ConfigurationError):
    """Raised when a pod manifest file cannot be read or is not a Pod.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The document is not a Kubernetes Pod
    """

    pass


class AuthenticationError(VaultInjectorError):
    """Raised when logging into Vault fails.

    This can occur when:
    - Vault is unreachable
    - The Kubernetes auth role rejects the service account
    """

    pass


class ServiceAccountTokenError(AuthenticationError):
    """Raised when the service account token file cannot be read."""

    pass


class SecretRetrievalError(VaultInjectorError):
    """Base class for failures while reading the secret from Vault."""

    pass


class SecretReadError(SecretRetrievalError):
    """Raised when the secret read fails at the transport or Vault level."""

    pass


class SecretNotFoundError(SecretRetrievalError):
    """Raised when nothing is stored at the configured secret path."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Vault secret path not found: {path}")


class SecretResolutionError(VaultInjectorError):
    """Base class for failures while resolving secret references."""

    pass


class MissingSecretKeyError(SecretResolutionError):
    """Raised when an environment value references a key absent from the secret."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"key not found: {key}")


class LaunchError(VaultInjectorError):
    """Raised when the target program cannot be started."""

    pass


class NoEntrypointError(LaunchError):
    """Raised when vault-env is invoked without a command to run."""

    def __init__(self) -> None:
        super().__init__(
            "No command is given, currently vault-env can't determine the entrypoint (command), "
            "please specify it explicitly"
        )


class ExecutableNotFoundError(LaunchError):
    """Raised when the target program cannot be found on PATH."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Binary not found: {name}")
