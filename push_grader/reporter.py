"""
Console, CI annotation and step summary reporting.
"""

from pathlib import Path

from .config import ERROR_ANNOTATION
from .models import ReviewVerdict, RunSummary


def annotate_error(message: str) -> None:
    """Print a line GitHub Actions renders as an error annotation."""
    print(f"{ERROR_ANNOTATION}{message}")


def write_step_summary(summary_path: Path | None, content: str) -> bool:
    """
    Append Markdown to the GitHub Actions step summary.

    Args:
        summary_path: Value of GITHUB_STEP_SUMMARY, or None.
        content: Markdown to append.

    Returns:
        True if the summary was written.
    """
    if summary_path is None:
        print("GITHUB_STEP_SUMMARY not found. Outputting results to stdout only.")
        return False
    try:
        with open(summary_path, "a", encoding="utf-8") as f:
            f.write(content.rstrip("\n") + "\n")
    except OSError as e:
        print(f"Warning: Failed to write to GITHUB_STEP_SUMMARY: {e}")
        return False
    return True


def _table_cell(text: str, limit: int = 60) -> str:
    text = text.replace("|", "\\|").replace("\r", "").replace("\n", "\\n")
    if len(text) > limit:
        text = text[:limit] + "..."
    return f"`{text}`" if text else ""


def format_run_report(summary: RunSummary) -> str:
    """
    Format test results as Markdown for the step summary.

    Args:
        summary: Results of the functional test run.

    Returns:
        Markdown with the summary line and a per-case table.
    """
    lines = [
        "## Functional Test Summary",
        "",
        summary.summary_line(),
        "",
        "| # | Description | Expected | Actual | Result |",
        "|---|---|---|---|---|",
    ]
    for i, result in enumerate(summary.results, 1):
        status = "PASSED" if result.passed else "FAILED"
        if result.timed_out:
            status += " (timeout)"
        lines.append(
            f"| {i} | {result.case.description.replace('|', '/')} "
            f"| {_table_cell(result.case.expected_output.strip())} "
            f"| {_table_cell(result.actual_output)} | {status} |"
        )
    return "\n".join(lines)


def report_run(summary: RunSummary, step_summary_path: Path | None = None) -> int:
    """
    Print the functional test summary and choose the exit code.

    Returns:
        0 if every case passed, 1 otherwise.
    """
    print("\n--- Functional Test Summary ---")
    write_step_summary(step_summary_path, format_run_report(summary))

    if not summary.all_passed:
        annotate_error(summary.summary_line())
        return 1
    print(summary.summary_line())
    return 0


def report_review(verdict: ReviewVerdict, step_summary_path: Path | None = None) -> int:
    """
    Print the qualitative review feedback and choose the exit code.

    Returns:
        1 if the feedback rejects the code, 0 otherwise.
    """
    print("--- AI Feedback ---")
    print(verdict.feedback)
    print("-------------------")

    write_step_summary(step_summary_path, verdict.feedback)

    if verdict.rejected:
        annotate_error("Code was rejected by the AI reviewer. Check the step summary for details.")
        return 1
    return 0
