"""
Compilation of student code for compiled languages.
"""

import subprocess

from .errors import CompilationError
from .languages import Project, resolve_command


def compile_project(project: Project, verbose: bool = False) -> bool:
    """
    Compile all relevant source files of a project.

    Args:
        project: Resolved project.
        verbose: Print compiler output on success.

    Returns:
        True if a compile step ran, False if the language needs none.

    Raises:
        CompilationError: If the compiler cannot be started or fails.
    """
    if not project.profile.needs_compilation:
        return False

    project.build_dir.mkdir(parents=True, exist_ok=True)
    cmd = resolve_command(project.profile.compile_command, project)
    print(f"\nCompiling student code: {' '.join(cmd)}")

    try:
        process = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as e:
        raise CompilationError(f"Failed to compile student code. Error: {e}") from e

    if process.returncode != 0:
        raise CompilationError(
            f"Failed to compile student code. Compiler exited with status {process.returncode}",
            output=process.stdout,
        )

    if verbose and process.stdout:
        print(f"  [DEBUG] Compiler output:\n{process.stdout}")
    print("Compilation successful.")
    return True
