"""
Review and functional-testing pipelines.

Each pipeline runs its stages in order and returns the process exit code.
Fatal conditions propagate as GraderError to the caller.
"""

from .builder import compile_project
from .case_generator import generate_test_cases
from .config_loader import Environment, GraderConfig, read_instructions
from .entry_point import resolve_entry_point
from .executor import run_test_cases
from .github_client import GitHubClient, changed_paths, read_push_event
from .languages import detect_language
from .llm_client import LLMClient, TextModel
from .reporter import report_review, report_run
from .reviewer import collect_code, review_code


def _fetch_changed_paths(
    config: GraderConfig,
    env: Environment,
    github: GitHubClient | None,
) -> list[str]:
    print("Reading GitHub push event...")
    event = read_push_event(env.require_event_path())
    if config.verbose:
        print(f"  [DEBUG] Files listed in the push payload: {event.changed_files}")

    if github is None:
        github = GitHubClient(env.require_github_token(), api_url=config.github_api_url)

    print(
        f"Fetching commit details for {event.repo_owner}/{event.repo_name}"
        f"@{event.head_commit_id} via GitHub API..."
    )
    files = github.fetch_commit_files(event.repo_owner, event.repo_name, event.head_commit_id)
    if config.verbose:
        print(f"  [DEBUG] Commit files: {[(f.filename, f.status) for f in files]}")

    return changed_paths(
        files,
        ignored_prefixes=config.ignored_prefixes,
        ignored_files=[config.instructions_file],
    )


def _make_model(config: GraderConfig, env: Environment) -> TextModel:
    return LLMClient(
        model=config.model,
        api_key=env.require_llm_api_key(),
        base_url=config.llm_base_url,
    )


def run_functional_tests(
    config: GraderConfig,
    env: Environment,
    model: TextModel | None = None,
    github: GitHubClient | None = None,
) -> int:
    """
    Generate test cases with the model and run them against the pushed program.

    Args:
        config: Grader configuration.
        env: GitHub Actions environment.
        model: Text completion client (built from config when None).
        github: Commits API client (built from env when None).

    Returns:
        0 if nothing relevant changed or every case passed, 1 otherwise.
    """
    paths = _fetch_changed_paths(config, env, github)

    detection = detect_language(paths)
    if detection is None:
        print("No relevant code files (.py, .java, .cpp) changed in this push. Skipping functional tests.")
        return 0
    print(f"Detected changes to {detection.profile.name} files: {list(detection.candidates)}")

    if model is None:
        model = _make_model(config, env)

    project = resolve_entry_point(
        detection,
        model,
        repo_root=config.repo_root,
        build_dir=config.build_dir,
    )

    print("\nGenerating test cases...")
    instructions = read_instructions(config.instructions_path)
    cases = generate_test_cases(model, instructions, count=config.test_case_count)

    compile_project(project, verbose=config.verbose)

    summary = run_test_cases(project, cases, timeout_seconds=config.execution_timeout_seconds)
    return report_run(summary, env.step_summary_path)


def run_review(
    config: GraderConfig,
    env: Environment,
    model: TextModel | None = None,
    github: GitHubClient | None = None,
) -> int:
    """
    Ask the model to approve or reject the pushed code.

    Args:
        config: Grader configuration.
        env: GitHub Actions environment.
        model: Text completion client (built from config when None).
        github: Commits API client (built from env when None).

    Returns:
        0 if nothing was reviewed or the code was approved, 1 if rejected.
    """
    paths = _fetch_changed_paths(config, env, github)
    if not paths:
        print("No relevant code files found for evaluation after filtering. Skipping evaluation.")
        return 0

    instructions = read_instructions(config.instructions_path)

    code = collect_code(config.repo_root, paths)
    if not code:
        print("No code could be read from the changed files. Skipping evaluation.")
        return 0

    if model is None:
        model = _make_model(config, env)

    verdict = review_code(model, instructions, code)
    return report_review(verdict, env.step_summary_path)
