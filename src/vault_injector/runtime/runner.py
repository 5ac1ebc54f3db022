"""The vault-env entrypoint flow.

vault-env runs as the first process of a mutated container. It logs into
Vault, reads the pod's secret, rebuilds the environment with every
``vault:<key>`` reference resolved and finally replaces itself with the
container's original command.

Everything up to the final exec happens in :func:`prepare_launch`, which
raises typed errors instead of exiting so the flow can be tested without a
live process hand-over.
"""

from collections.abc import Mapping, Sequence
from typing import NoReturn

from icecream import ic

from vault_injector import console
from vault_injector.constants import ENV_VAULT_PATH, ENV_VAULT_ROLE, SERVICE_ACCOUNT_TOKEN_PATH
from vault_injector.exceptions import MissingEnvironmentError, NoEntrypointError
from vault_injector.models import LaunchPlan
from vault_injector.runtime.documents import resolve_secret_document
from vault_injector.runtime.launcher import exec_program, find_executable
from vault_injector.runtime.sanitizer import sanitize_environ
from vault_injector.runtime.vault import VaultSettings, login, read_secret


def _require(environ: Mapping[str, str], variable: str) -> str:
    value = environ.get(variable, "")
    if not value:
        raise MissingEnvironmentError(variable)
    return value


def prepare_launch(
    command: Sequence[str],
    environ: Mapping[str, str],
    *,
    token_path: str = SERVICE_ACCOUNT_TOKEN_PATH,
) -> LaunchPlan:
    """Resolve secrets and work out how to start the target program.

    Args:
        command: The target program followed by its arguments.
        environ: The inherited process environment.
        token_path: Location of the service account token.

    Returns:
        The plan to hand to :func:`exec_program`.

    Raises:
        MissingEnvironmentError: If VAULT_ROLE or VAULT_PATH is unset.
        AuthenticationError: If the Vault login fails.
        SecretRetrievalError: If the secret cannot be read.
        MissingSecretKeyError: If a reference names an unknown key.
        NoEntrypointError: If no command was given.
        ExecutableNotFoundError: If the command is not on PATH.

    """
    role = _require(environ, ENV_VAULT_ROLE)
    path = _require(environ, ENV_VAULT_PATH)

    client = login(role, VaultSettings.from_environ(environ), token_path=token_path)
    document = resolve_secret_document(read_secret(client, path))

    console.action("Processing environment variables from Vault secret")
    sanitized = sanitize_environ(environ, document)

    if not command:
        raise NoEntrypointError()

    binary = find_executable(command[0])
    ic(binary, command)
    return LaunchPlan(binary=binary, argv=tuple(command), environ=sanitized)


def run(command: Sequence[str], environ: Mapping[str, str]) -> NoReturn:
    """Run the full vault-env flow and hand the process over.

    Raises:
        VaultInjectorError: On any failure before the hand-over.

    """
    plan = prepare_launch(command, environ)
    console.success("Launching command")
    exec_program(plan)
