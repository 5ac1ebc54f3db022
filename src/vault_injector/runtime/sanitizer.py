"""Construction of the environment handed to the launched program."""

from collections.abc import Mapping

from icecream import ic

from vault_injector.constants import VAULT_BOOTSTRAP_VARIABLES
from vault_injector.exceptions import MissingSecretKeyError
from vault_injector.runtime.references import parse_secret_reference


def sanitize_environ(environ: Mapping[str, str], document: Mapping[str, str]) -> dict[str, str]:
    """Resolve secret references and strip Vault bootstrap variables.

    Entries are processed in their original order:

    * a ``vault:<key>`` value is replaced by the document's value for ``key``;
    * any entry named in ``VAULT_BOOTSTRAP_VARIABLES`` is dropped, whether its
      value was literal or resolved;
    * everything else is passed through unchanged.

    Args:
        environ: The inherited process environment.
        document: The resolved secret document.

    Returns:
        The sanitized environment, preserving the order of surviving entries.

    Raises:
        MissingSecretKeyError: If a reference names a key absent from the document.

    """
    sanitized: dict[str, str] = {}
    resolved = 0
    for name, value in environ.items():
        key = parse_secret_reference(value)
        if key is not None:
            if key not in document:
                raise MissingSecretKeyError(key)
            value = document[key]
            resolved += 1
        if name in VAULT_BOOTSTRAP_VARIABLES:
            continue
        sanitized[name] = value

    ic(resolved, len(sanitized))
    return sanitized
