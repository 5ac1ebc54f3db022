"""Names and paths shared by the admission webhook and the vault-env runtime.

The webhook writes these into mutated pods and the runtime expects them at
container start, so both sides must agree on every value here.
"""

# Pod annotations
ANNOTATION_ENABLED = "vault.security/enabled"
ANNOTATION_ADDRESS = "vault.security/vault-addr"
ANNOTATION_ROLE = "vault.security/vault-role"
ANNOTATION_PATH = "vault.security/vault-path"
ANNOTATION_TLS_SECRET_NAME = "vault.security/vault-tls-secret-name"

# Environment values starting with this prefix point at a key of the Vault secret
SECRET_REFERENCE_PREFIX = "vault:"

# Volumes added to mutated pods
VAULT_ENV_VOLUME = "vault-env"
VAULT_ENV_MOUNT_PATH = "/vault"
TLS_VOLUME = "tls"
TLS_MOUNT_PATH = "/etc/tls"

VAULT_ENV_BINARY = f"{VAULT_ENV_MOUNT_PATH}/vault-env"
CA_BUNDLE_PATH = f"{TLS_MOUNT_PATH}/ca.pem"

# Staging init container
INIT_CONTAINER_NAME = "init"
DEFAULT_VAULT_ENV_IMAGE = "innovia/vault-env:1.1.0"
STAGING_COMMAND = ["sh", "-c", f"cp /usr/local/bin/vault-env {VAULT_ENV_MOUNT_PATH}/"]

# Environment variables written by the webhook and read by vault-env
ENV_VAULT_ADDR = "VAULT_ADDR"
ENV_VAULT_PATH = "VAULT_PATH"
ENV_VAULT_ROLE = "VAULT_ROLE"
ENV_VAULT_CAPATH = "VAULT_CAPATH"

SERVICE_ACCOUNT_TOKEN_PATH = "/var/run/secrets/kubernetes.io/serviceaccount/token"
KUBERNETES_AUTH_MOUNT_POINT = "kubernetes"
DEFAULT_VAULT_ADDR = "https://127.0.0.1:8200"

# Vault client variables that only matter to vault-env itself; they are never
# handed to the launched program.
VAULT_BOOTSTRAP_VARIABLES = frozenset(
    {
        "VAULT_TOKEN",
        "VAULT_ADDR",
        "VAULT_CACERT",
        "VAULT_CAPATH",
        "VAULT_CLIENT_CERT",
        "VAULT_CLIENT_KEY",
        "VAULT_CLIENT_TIMEOUT",
        "VAULT_CLUSTER_ADDR",
        "VAULT_MAX_RETRIES",
        "VAULT_REDIRECT_ADDR",
        "VAULT_SKIP_VERIFY",
        "VAULT_TLS_SERVER_NAME",
        "VAULT_CLI_NO_COLOR",
        "VAULT_RATE_LIMIT",
        "VAULT_NAMESPACE",
        "VAULT_MFA",
        "VAULT_ROLE",
        "VAULT_PATH",
    }
)
