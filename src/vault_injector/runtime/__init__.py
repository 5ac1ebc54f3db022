"""vault-env runtime subpackage.

This package resolves ``vault:`` references in a container's environment and
hands the process over to the container's real command.
"""

from vault_injector.runtime.documents import resolve_secret_document
from vault_injector.runtime.launcher import exec_program, find_executable
from vault_injector.runtime.references import is_secret_reference, parse_secret_reference
from vault_injector.runtime.runner import prepare_launch, run
from vault_injector.runtime.sanitizer import sanitize_environ
from vault_injector.runtime.vault import VaultSettings, login, read_secret

__all__ = [
    # references
    "is_secret_reference",
    "parse_secret_reference",
    # documents
    "resolve_secret_document",
    # sanitizer
    "sanitize_environ",
    # vault
    "VaultSettings",
    "login",
    "read_secret",
    # launcher
    "find_executable",
    "exec_program",
    # runner
    "prepare_launch",
    "run",
]
