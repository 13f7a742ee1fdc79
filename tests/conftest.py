"""Shared fixtures for Push Grader tests."""

import json
import sys
from pathlib import Path

import httpx
import pytest

from push_grader.config_loader import Environment, GraderConfig
from push_grader.errors import EmptyResponseError
from push_grader.github_client import GitHubClient
from push_grader.languages import LanguageProfile, Project, Slot

PROGRAMS_DIR = Path(__file__).parent / "programs"


class FakeModel:
    """In-memory stand-in for LLMClient that replays canned answers."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, bool]] = []

    def complete(self, prompt: str, json_mode: bool = False) -> str:
        self.calls.append((prompt, json_mode))
        if not self.answers:
            raise EmptyResponseError("fake model has no more answers")
        return self.answers.pop(0)


@pytest.fixture
def python_profile():
    """Python profile that runs programs with the current interpreter."""
    return LanguageProfile(
        name="Python",
        extensions=(".py",),
        run_command=(sys.executable, Slot.ENTRY_FILE),
    )


@pytest.fixture
def make_project(python_profile, tmp_path):
    """Build a Project for one of the sample programs."""

    def _make(program: str, profile: LanguageProfile | None = None) -> Project:
        entry = PROGRAMS_DIR / program
        return Project(
            profile=profile or python_profile,
            entry_file=entry,
            sources=(entry,),
            build_dir=tmp_path / "build",
        )

    return _make


@pytest.fixture
def push_payload():
    return {
        "head_commit": {"id": "abc123"},
        "repository": {"name": "homework", "owner": {"login": "student"}},
        "commits": [
            {"added": ["main.py"], "modified": ["README.md"], "removed": ["old.py"]},
        ],
    }


@pytest.fixture
def event_file(tmp_path, push_payload):
    path = tmp_path / "event.json"
    path.write_text(json.dumps(push_payload), encoding="utf-8")
    return path


@pytest.fixture
def make_github():
    """Build a GitHubClient whose commits endpoint returns the given files."""

    def _make(files: list[dict], status_code: int = 200) -> GitHubClient:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json={"files": files})

        return GitHubClient("test-token", http_client=httpx.Client(transport=httpx.MockTransport(handler)))

    return _make


@pytest.fixture
def repo(tmp_path):
    """A checkout directory with homework instructions."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / "homework0e3.txt").write_text(
        "Read two integers from one line and print their sum.\n", encoding="utf-8"
    )
    return root


@pytest.fixture
def grader_config(repo, tmp_path):
    return GraderConfig(
        repo_root=repo,
        build_dir=tmp_path / "build",
        execution_timeout_seconds=5,
    )


@pytest.fixture
def environment(event_file, tmp_path):
    return Environment(
        event_path=event_file,
        github_token="test-token",
        llm_api_key="test-key",
        step_summary_path=tmp_path / "summary.md",
    )
