"""Kubernetes resources injected into mutated pods.

Resources are built with the typed ``kubernetes.client`` models and then
serialized to the JSON form used by admission requests, so the webhook works
on plain pod documents while keeping the field names checked by the models.
"""

from typing import Any

from kubernetes import client

from vault_injector.constants import (
    CA_BUNDLE_PATH,
    ENV_VAULT_ADDR,
    ENV_VAULT_CAPATH,
    ENV_VAULT_PATH,
    ENV_VAULT_ROLE,
    INIT_CONTAINER_NAME,
    STAGING_COMMAND,
    TLS_MOUNT_PATH,
    TLS_VOLUME,
    VAULT_ENV_MOUNT_PATH,
    VAULT_ENV_VOLUME,
)
from vault_injector.models import SecretInjectionConfig


def _serialize(model: Any) -> Any:
    return client.ApiClient().sanitize_for_serialization(model)


def _vault_env_mount() -> client.V1VolumeMount:
    return client.V1VolumeMount(name=VAULT_ENV_VOLUME, mount_path=VAULT_ENV_MOUNT_PATH)


def build_volumes(config: SecretInjectionConfig) -> list[dict[str, Any]]:
    """Return the memory-backed staging volume and the Vault CA secret volume."""
    volumes = [
        client.V1Volume(
            name=VAULT_ENV_VOLUME,
            empty_dir=client.V1EmptyDirVolumeSource(medium="Memory"),
        ),
        client.V1Volume(
            name=TLS_VOLUME,
            secret=client.V1SecretVolumeSource(secret_name=config.tls_secret_name),
        ),
    ]
    return _serialize(volumes)


def build_init_container(image: str) -> dict[str, Any]:
    """Return the init container that copies vault-env onto the staging volume.

    Args:
        image: Image shipping the vault-env binary at /usr/local/bin/vault-env.

    """
    container = client.V1Container(
        name=INIT_CONTAINER_NAME,
        image=image,
        image_pull_policy="IfNotPresent",
        command=list(STAGING_COMMAND),
        volume_mounts=[_vault_env_mount()],
    )
    return _serialize(container)


def build_volume_mounts() -> list[dict[str, Any]]:
    """Return the mounts added to every mutated container."""
    mounts = [
        _vault_env_mount(),
        client.V1VolumeMount(name=TLS_VOLUME, mount_path=TLS_MOUNT_PATH),
    ]
    return _serialize(mounts)


def build_env(config: SecretInjectionConfig) -> list[dict[str, Any]]:
    """Return the variables vault-env reads to reach Vault, in injection order."""
    env = [
        client.V1EnvVar(name=ENV_VAULT_ADDR, value=config.address),
        client.V1EnvVar(name=ENV_VAULT_PATH, value=config.path),
        client.V1EnvVar(name=ENV_VAULT_ROLE, value=config.role),
        client.V1EnvVar(name=ENV_VAULT_CAPATH, value=CA_BUNDLE_PATH),
    ]
    return _serialize(env)
