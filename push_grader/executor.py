"""
Functional test execution against the student program.

Runs the resolved command once per test case, feeding the case input on
standard input and comparing trimmed standard output.
"""

import subprocess
from typing import Sequence

from .config import EXECUTION_TIMEOUT_SECONDS
from .languages import Project, resolve_command
from .models import CaseResult, RunSummary, TestCase


def outputs_match(actual: str, expected: str) -> bool:
    """Compare outputs, ignoring only leading and trailing whitespace."""
    return actual.strip() == expected.strip()


def run_test_case(
    cmd: Sequence[str],
    case: TestCase,
    timeout_seconds: float | None = EXECUTION_TIMEOUT_SECONDS,
) -> CaseResult:
    """
    Run the program on a single test case.

    Args:
        cmd: Resolved run command.
        case: Test case to execute.
        timeout_seconds: Maximum run time; None waits indefinitely.

    Returns:
        CaseResult. Execution problems are recorded, never raised.
    """
    try:
        process = subprocess.run(
            list(cmd),
            input=case.input,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout_seconds,
        )
    except subprocess.TimeoutExpired as e:
        stdout = e.stdout.decode(errors="replace") if isinstance(e.stdout, bytes) else (e.stdout or "")
        stderr = e.stderr.decode(errors="replace") if isinstance(e.stderr, bytes) else (e.stderr or "")
        return CaseResult(
            case=case,
            passed=False,
            actual_output=stdout.strip(),
            stderr=stderr,
            error_message=f"Execution timed out after {timeout_seconds} seconds",
            timed_out=True,
        )
    except OSError as e:
        return CaseResult(
            case=case,
            passed=False,
            error_message=f"Failed to start program: {e}",
        )

    actual_output = process.stdout.strip()
    error_message = ""
    if process.returncode != 0:
        error_message = f"Program exited with status {process.returncode}"

    return CaseResult(
        case=case,
        passed=process.returncode == 0 and outputs_match(process.stdout, case.expected_output),
        actual_output=actual_output,
        stderr=process.stderr,
        exit_code=process.returncode,
        error_message=error_message,
    )


def run_test_cases(
    project: Project,
    cases: Sequence[TestCase],
    timeout_seconds: float | None = EXECUTION_TIMEOUT_SECONDS,
) -> RunSummary:
    """
    Run every test case sequentially and tally the results.

    Args:
        project: Resolved (and compiled, if needed) project.
        cases: Test cases in execution order.
        timeout_seconds: Per-case timeout.

    Returns:
        RunSummary with one result per case.
    """
    cmd = resolve_command(project.profile.run_command, project)
    summary = RunSummary(language=project.profile.name)

    for i, case in enumerate(cases, 1):
        print(f"\n--- Running Test Case {i}: {case.description} ---")
        result = run_test_case(cmd, case, timeout_seconds)

        print(f"Input: '{case.input}'")
        print(f"Expected Output: '{case.expected_output.strip()}'")
        print(f"Actual Output:   '{result.actual_output}'")
        if result.error_message:
            print(f"Error: {result.error_message}")
        if not result.passed and result.stderr:
            print(f"Stderr:\n{result.stderr.rstrip()}")
        print(f"Result: {'PASSED' if result.passed else 'FAILED'}")

        summary.results.append(result)

    return summary
