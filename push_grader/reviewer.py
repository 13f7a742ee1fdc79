"""
Qualitative review of pushed code by the language model.

The verdict is a crude classifier: any occurrence of "REJECTED" in the
feedback, in any letter case, rejects the push.
"""

from pathlib import Path
from typing import Sequence

from .config import REVIEW_PROMPT_TEMPLATE
from .llm_client import TextModel
from .models import ReviewVerdict


def collect_code(repo_root: Path, paths: Sequence[str]) -> str:
    """
    Concatenate the changed files with a header per file.

    Unreadable files are skipped with a warning.

    Args:
        repo_root: Directory the paths are relative to.
        paths: Repository-relative file paths.

    Returns:
        Combined code listing, empty if nothing could be read.
    """
    chunks = []
    for path in paths:
        try:
            code = (repo_root / path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            print(f"Warning: Could not read file '{path}': {e}")
            continue
        chunks.append(f"--- File: {path} ---\n{code}\n\n")
    return "".join(chunks)


def build_review_prompt(instructions: str, code: str) -> str:
    return REVIEW_PROMPT_TEMPLATE.format(instructions=instructions, code=code)


def review_code(model: TextModel, instructions: str, code: str) -> ReviewVerdict:
    """
    Ask the model for an APPROVED/REJECTED evaluation.

    Args:
        model: Text completion client.
        instructions: Homework instructions text.
        code: Output of collect_code.

    Returns:
        ReviewVerdict for the feedback.
    """
    feedback = model.complete(build_review_prompt(instructions, code))
    return ReviewVerdict.from_feedback(feedback)
