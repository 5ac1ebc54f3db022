"""Parsing of ``vault:<key>`` secret references found in environment values."""

from vault_injector.constants import SECRET_REFERENCE_PREFIX


def is_secret_reference(value: str | None) -> bool:
    """Return True if the value points at a key of the Vault secret."""
    return bool(value) and value.startswith(SECRET_REFERENCE_PREFIX)


def parse_secret_reference(value: str | None) -> str | None:
    """Extract the lookup key from a secret reference.

    Args:
        value: An environment value, possibly None for ``valueFrom`` entries.

    Returns:
        The key following the ``vault:`` prefix, or None when the value is
        not a reference. The key may be empty.

    """
    if not is_secret_reference(value):
        return None
    return value[len(SECRET_REFERENCE_PREFIX) :]
