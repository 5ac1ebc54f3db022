"""Normalization of Vault read responses into a flat key/value mapping.

KV version 2 engines wrap the payload as ``{"data": {...}, "metadata": {...}}``
while version 1 engines return the payload itself. Both end up as a
``dict[str, str]`` suitable for environment values.
"""

import json
from collections.abc import Mapping
from typing import Any

_VERSIONED_DATA_FIELD = "data"


def _to_environ_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def resolve_secret_document(payload: Mapping[str, Any]) -> dict[str, str]:
    """Produce the secret document from the ``data`` field of a Vault response.

    The versioned shape is preferred whenever its nested field holds a mapping;
    otherwise the payload is used as the flat map.

    Args:
        payload: The ``data`` field of the secret returned by Vault.

    Returns:
        Mapping of secret keys to string values. Non-string values are
        rendered as JSON text.

    """
    nested = payload.get(_VERSIONED_DATA_FIELD)
    data = nested if isinstance(nested, Mapping) else payload
    return {str(key): _to_environ_value(value) for key, value in data.items()}
