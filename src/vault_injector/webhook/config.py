"""Reading and validating the injection settings carried by pod annotations."""

from collections.abc import Mapping

from vault_injector.constants import (
    ANNOTATION_ADDRESS,
    ANNOTATION_ENABLED,
    ANNOTATION_PATH,
    ANNOTATION_ROLE,
    ANNOTATION_TLS_SECRET_NAME,
)
from vault_injector.exceptions import MissingAnnotationError
from vault_injector.models import SecretInjectionConfig
from vault_injector.parsing import parse_bool


def parse_injection_config(annotations: Mapping[str, str] | None) -> SecretInjectionConfig:
    """Build the injection config from pod annotations.

    Missing annotations become empty strings. An enabled flag that is absent
    or not a boolean literal counts as disabled.

    Args:
        annotations: The pod's ``metadata.annotations``, possibly None.

    Returns:
        The parsed config.

    """
    annotations = annotations or {}
    return SecretInjectionConfig(
        address=annotations.get(ANNOTATION_ADDRESS, ""),
        role=annotations.get(ANNOTATION_ROLE, ""),
        path=annotations.get(ANNOTATION_PATH, ""),
        tls_secret_name=annotations.get(ANNOTATION_TLS_SECRET_NAME, ""),
        enabled=parse_bool(annotations.get(ANNOTATION_ENABLED)),
    )


def validate_injection_config(config: SecretInjectionConfig) -> None:
    """Check that an enabled config carries every required setting.

    Raises:
        MissingAnnotationError: For the first empty setting, checked in the
            order address, TLS secret name, path, role.

    """
    required = (
        (config.address, ANNOTATION_ADDRESS, "address"),
        (config.tls_secret_name, ANNOTATION_TLS_SECRET_NAME, "TLS secret name"),
        (config.path, ANNOTATION_PATH, "path"),
        (config.role, ANNOTATION_ROLE, "role"),
    )
    for value, annotation, description in required:
        if not value:
            raise MissingAnnotationError(annotation, description)
