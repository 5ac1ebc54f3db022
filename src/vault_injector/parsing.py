"""Parsing helpers for pod manifests and boolean settings.

This module provides functions for loading Pod manifests from YAML files
and for interpreting boolean annotation and environment values.
"""

from typing import Any

import yaml

from vault_injector.exceptions import ManifestParsingError

_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def parse_bool(value: str | None, *, default: bool = False) -> bool:
    """Interpret a boolean literal.

    Accepts the literals ``1 t T TRUE true True`` and ``0 f F FALSE false False``.

    Args:
        value: The raw string, or None when unset.
        default: Returned for None and for unrecognized values.

    Returns:
        The parsed boolean.

    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


def parse_pod_manifest(manifest_path: str) -> dict[str, Any]:
    """Parse a YAML file holding a single Pod.

    Args:
        manifest_path: Path to the manifest file.

    Returns:
        The Pod document as a dictionary.

    Raises:
        ManifestParsingError: If the file does not exist, contains malformed
            YAML, holds more or fewer than one document, or the document
            is not a Pod.

    """
    try:
        with open(manifest_path) as stream:
            docs = [doc for doc in yaml.safe_load_all(stream) if doc is not None]
    except FileNotFoundError as err:
        raise ManifestParsingError(f"Manifest file '{manifest_path}' does not exist") from err
    except yaml.YAMLError as err:
        raise ManifestParsingError(f"Manifest file '{manifest_path}' contains malformed YAML: {err}") from err

    if len(docs) != 1:
        raise ManifestParsingError(
            f"File '{manifest_path}' must contain exactly one YAML document, found {len(docs)}"
        )
    pod = docs[0]
    if not isinstance(pod, dict) or pod.get("kind") != "Pod":
        raise ManifestParsingError(f"File '{manifest_path}' does not contain a Kubernetes Pod")
    return pod
