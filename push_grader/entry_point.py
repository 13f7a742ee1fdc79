"""
Entry point resolution for a detected language.
"""

from pathlib import Path, PurePosixPath
from typing import Sequence

from .config import DEFAULT_BUILD_DIR, ENTRY_POINT_PROMPT_TEMPLATE
from .errors import EntryPointError, LLMResponseError
from .languages import Detection, Project
from .llm_client import TextModel


def ask_model_for_entry_point(model: TextModel, candidates: Sequence[str]) -> str:
    """
    Ask the language model which candidate is the program's main file.

    Args:
        model: Text completion client.
        candidates: Repository-relative candidate paths.

    Returns:
        The chosen basename, guaranteed to be one of the candidates' basenames.

    Raises:
        EntryPointError: If there are no candidates, the model fails, or its
            answer is not exactly one of the candidate basenames.
    """
    basenames = [PurePosixPath(c).name for c in candidates]
    if not basenames:
        raise EntryPointError("No candidate files to choose an entry point from.")

    print(f"Multiple potential entry points found: {basenames}. Asking AI for the main file...")
    prompt = ENTRY_POINT_PROMPT_TEMPLATE.format(filenames="\n".join(basenames))

    try:
        choice = model.complete(prompt).strip()
    except LLMResponseError as e:
        raise EntryPointError(f"AI failed to determine entry point: {e}") from e

    if choice not in basenames:
        raise EntryPointError(
            f"AI chose '{choice}', which is not in the list of found files: {basenames}"
        )
    print(f"AI selected '{choice}' as the entry point.")
    return choice


def resolve_entry_point(
    detection: Detection,
    model: TextModel | None,
    repo_root: Path = Path("."),
    build_dir: Path = DEFAULT_BUILD_DIR,
) -> Project:
    """
    Build the Project for a detected language.

    A single candidate is used directly; the model is only consulted when
    there are several.

    Args:
        detection: Detected profile and candidate files.
        model: Text completion client, required for multiple candidates.
        repo_root: Directory the candidate paths are relative to.
        build_dir: Directory for compiled output.

    Returns:
        Resolved Project.

    Raises:
        EntryPointError: If the entry point cannot be resolved.
    """
    candidates = list(detection.candidates)
    if not candidates:
        raise EntryPointError(f"No {detection.profile.name} files to choose an entry point from.")

    if len(candidates) == 1:
        entry = candidates[0]
        print(f"Found single {detection.profile.name} file: using '{PurePosixPath(entry).name}' as the entry point.")
    else:
        if model is None:
            raise EntryPointError("Multiple candidate files but no language model configured.")
        choice = ask_model_for_entry_point(model, candidates)
        entry = next(c for c in candidates if PurePosixPath(c).name == choice)

    return Project(
        profile=detection.profile,
        entry_file=repo_root / entry,
        sources=tuple(repo_root / c for c in candidates),
        build_dir=build_dir,
    )
