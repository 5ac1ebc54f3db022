"""Hand-over of the process to the target program."""

import os
import shutil
import subprocess
import sys
from typing import NoReturn

from icecream import ic

from vault_injector.exceptions import ExecutableNotFoundError, LaunchError
from vault_injector.models import LaunchPlan

# Process image replacement is only reliable on POSIX systems
_HAS_EXEC = os.name == "posix"


def find_executable(name: str) -> str:
    """Resolve a program name through PATH.

    Names containing a path separator are checked as given.

    Args:
        name: The program name or path.

    Returns:
        The absolute path of the executable.

    Raises:
        ExecutableNotFoundError: If no executable matches.

    """
    binary = shutil.which(name)
    if binary is None:
        raise ExecutableNotFoundError(name)
    return os.path.abspath(binary)


def exec_program(plan: LaunchPlan) -> NoReturn:
    """Replace the current process with the planned program.

    On POSIX the process image is replaced with ``execve`` and nothing after
    the call runs. Elsewhere the program is spawned as a child and this
    process exits with its status.

    Raises:
        LaunchError: If the operating system refuses to start the program.

    """
    ic(plan)
    try:
        if not _HAS_EXEC:
            completed = subprocess.run([plan.binary, *plan.argv[1:]], env=plan.environ)
            sys.exit(completed.returncode)
        os.execve(plan.binary, list(plan.argv), plan.environ)
    except OSError as err:
        raise LaunchError(f"Failed to exec process '{plan.binary}': {err}") from err
