"""Shared test fixtures for vault-secrets-injector tests."""

import pytest

VAULT_ANNOTATIONS = {
    "vault.security/enabled": "true",
    "vault.security/vault-addr": "https://vault.default.svc.cluster.local:8200",
    "vault.security/vault-role": "some-role",
    "vault.security/vault-path": "/secret/some/path",
    "vault.security/vault-tls-secret-name": "vault-consul-ca",
}


@pytest.fixture
def vault_annotations():
    """Annotations enabling injection with every required setting."""
    return dict(VAULT_ANNOTATIONS)


@pytest.fixture
def plain_pod():
    """Pod without any Vault annotation."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {"name": "test-pod-with-no-annotation", "namespace": "default"},
        "spec": {
            "initContainers": [{"name": "init", "image": "some-image"}],
            "containers": [
                {
                    "name": "main",
                    "image": "alpine",
                    "command": ["command"],
                    "args": ["with", "extra", "args"],
                    "env": [{"name": "SOME_VAR", "value": "12345678"}],
                }
            ],
            "volumes": [{"name": "EmptyDir", "emptyDir": {}}],
        },
    }


@pytest.fixture
def secret_pod(vault_annotations):
    """Pod enabling injection with one container referencing a secret."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": "test-pod",
            "namespace": "default",
            "annotations": vault_annotations,
        },
        "spec": {
            "containers": [
                {
                    "name": "alpine",
                    "image": "alpine",
                    "command": ["user-command"],
                    "args": ["with", "extra", "args"],
                    "env": [{"name": "AWS_SECRET_ACCESS_KEY", "value": "vault:AWS_SECRET_ACCESS_KEY"}],
                }
            ],
        },
    }


@pytest.fixture
def injected_env():
    """Environment entries appended to every mutated container."""
    return [
        {"name": "VAULT_ADDR", "value": "https://vault.default.svc.cluster.local:8200"},
        {"name": "VAULT_PATH", "value": "/secret/some/path"},
        {"name": "VAULT_ROLE", "value": "some-role"},
        {"name": "VAULT_CAPATH", "value": "/etc/tls/ca.pem"},
    ]


@pytest.fixture
def injected_mounts():
    """Volume mounts appended to every mutated container."""
    return [
        {"name": "vault-env", "mountPath": "/vault"},
        {"name": "tls", "mountPath": "/etc/tls"},
    ]


@pytest.fixture
def staging_init_container():
    """The init container copying vault-env onto the shared volume."""
    return {
        "name": "init",
        "image": "innovia/vault-env:1.1.0",
        "imagePullPolicy": "IfNotPresent",
        "command": ["sh", "-c", "cp /usr/local/bin/vault-env /vault/"],
        "volumeMounts": [{"name": "vault-env", "mountPath": "/vault"}],
    }


@pytest.fixture
def injected_volumes():
    """Volumes appended to every mutated pod."""
    return [
        {"name": "vault-env", "emptyDir": {"medium": "Memory"}},
        {"name": "tls", "secret": {"secretName": "vault-consul-ca"}},
    ]


@pytest.fixture
def token_file(tmp_path):
    """Service account token file."""
    path = tmp_path / "token"
    path.write_text("eyJhbGciOiJSUzI1NiJ9.payload.signature\n")
    return str(path)


@pytest.fixture
def runtime_environ():
    """Environment of a mutated container at start."""
    return {
        "PATH": "/usr/local/bin:/usr/bin:/bin",
        "AWS_SECRET_ACCESS_KEY": "vault:AWS_SECRET_ACCESS_KEY",
        "LOG_LEVEL": "info",
        "VAULT_ADDR": "https://vault.default.svc.cluster.local:8200",
        "VAULT_PATH": "secret/data/some/path",
        "VAULT_ROLE": "some-role",
        "VAULT_CAPATH": "/etc/tls/ca.pem",
    }
