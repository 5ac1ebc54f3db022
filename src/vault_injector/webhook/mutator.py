"""Pod mutation engine.

This module rewrites pods that request Vault injection so their containers
start through vault-env. The transformation is pure: the pod passed in is
never modified, a mutated deep copy is returned instead.
"""

import copy
from typing import Any

from icecream import ic

from vault_injector import console
from vault_injector.constants import DEFAULT_VAULT_ENV_IMAGE, VAULT_ENV_BINARY
from vault_injector.models import MutationResult, SecretInjectionConfig
from vault_injector.runtime.references import is_secret_reference
from vault_injector.webhook.config import parse_injection_config, validate_injection_config
from vault_injector.webhook.resources import (
    build_env,
    build_init_container,
    build_volume_mounts,
    build_volumes,
)


def _uses_secrets(container: dict[str, Any]) -> bool:
    return any(is_secret_reference(env.get("value")) for env in container.get("env") or [])


def mutate_containers(containers: list[dict[str, Any]], config: SecretInjectionConfig) -> bool:
    """Rewrite, in place, every container that references Vault secrets.

    A container qualifies when at least one of its env values starts with
    ``vault:``. Its command becomes the staged vault-env binary and the
    original command followed by the original args becomes its args. The
    staging and TLS mounts and the four VAULT_* variables are appended.
    Other containers are left untouched.

    Args:
        containers: Container documents, modified in place.
        config: Validated injection config.

    Returns:
        True if any container was rewritten.

    """
    mutated = False
    for container in containers:
        if not _uses_secrets(container):
            continue

        mutated = True
        args = [*(container.get("command") or []), *(container.get("args") or [])]
        container["command"] = [VAULT_ENV_BINARY]
        container["args"] = args
        container["volumeMounts"] = [*(container.get("volumeMounts") or []), *build_volume_mounts()]
        container["env"] = [*(container.get("env") or []), *build_env(config)]
        console.step(f"Injecting vault-env into container {console.highlight(container.get('name', ''))}")

    return mutated


def mutate_pod_spec(
    spec: dict[str, Any],
    config: SecretInjectionConfig,
    *,
    vault_env_image: str = DEFAULT_VAULT_ENV_IMAGE,
) -> bool:
    """Mutate a pod spec in place.

    Init containers are processed before regular containers. When anything
    was rewritten the staging init container is put first among the init
    containers and the staging and TLS volumes are appended.

    Args:
        spec: The pod's ``spec``, modified in place.
        config: Validated injection config.
        vault_env_image: Image for the staging init container.

    Returns:
        True if any container was rewritten.

    """
    init_containers = spec.get("initContainers") or []
    containers = spec.get("containers") or []

    init_containers_mutated = mutate_containers(init_containers, config)
    containers_mutated = mutate_containers(containers, config)
    if not (init_containers_mutated or containers_mutated):
        return False

    spec["initContainers"] = [build_init_container(vault_env_image), *init_containers]
    spec["volumes"] = [*(spec.get("volumes") or []), *build_volumes(config)]
    return True


def mutate_pod(pod: dict[str, Any], *, vault_env_image: str = DEFAULT_VAULT_ENV_IMAGE) -> MutationResult:
    """Apply Vault injection to a pod document.

    Args:
        pod: The Pod as received in the admission request. It is never modified.
        vault_env_image: Image for the staging init container.

    Returns:
        ``MutationResult(pod, False)`` with the very object passed in when
        injection is not enabled or no container references a secret,
        otherwise a mutated copy with ``mutated=True``.

    Raises:
        MissingAnnotationError: If injection is enabled but a required
            annotation is missing. No mutation is applied.

    """
    metadata = pod.get("metadata") or {}
    config = parse_injection_config(metadata.get("annotations"))
    if not config.enabled:
        return MutationResult(pod=pod, mutated=False)

    validate_injection_config(config)
    ic(config)

    mutated_pod = copy.deepcopy(pod)
    spec = mutated_pod.setdefault("spec", {})
    if not mutate_pod_spec(spec, config, vault_env_image=vault_env_image):
        return MutationResult(pod=pod, mutated=False)

    return MutationResult(pod=mutated_pod, mutated=True)
