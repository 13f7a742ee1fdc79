"""
GitHub push event parsing and commit detail retrieval.
"""

import json
from pathlib import Path
from typing import Iterable

import httpx
from pydantic import ValidationError

from .config import GITHUB_API_URL, GITHUB_API_VERSION
from .errors import EventPayloadError, GitHubAPIError
from .models import CommitDetails, CommitFile, PushEvent


def read_push_event(event_path: Path) -> PushEvent:
    """
    Parse the webhook payload written by GitHub Actions.

    Args:
        event_path: Value of GITHUB_EVENT_PATH.

    Returns:
        PushEvent with a non-empty commit SHA, owner and repository name.

    Raises:
        EventPayloadError: If the file is unreadable, malformed or incomplete.
    """
    try:
        payload = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except OSError as e:
        raise EventPayloadError(f"Failed to read GITHUB_EVENT_PATH: {e}") from e
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"Failed to parse GitHub push event payload: {e}") from e

    try:
        event = PushEvent.model_validate(payload)
    except ValidationError as e:
        raise EventPayloadError(f"Unexpected GitHub push event payload: {e}") from e

    if not (event.head_commit_id and event.repo_owner and event.repo_name):
        raise EventPayloadError(
            "Could not extract commit SHA, repo owner, or repo name from event payload."
        )
    return event


class GitHubClient:
    """
    Minimal client for the GitHub commits API.
    """

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_API_URL,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: Token sent in the Authorization header.
            api_url: REST API base URL.
            http_client: Pre-configured httpx client owned by the caller.
                When omitted, each request opens and closes its own client.
        """
        self.api_url = api_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "Authorization": f"token {token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        self.http_client = http_client

    def fetch_commit_files(self, owner: str, repo: str, sha: str) -> list[CommitFile]:
        """
        Fetch the files touched by a commit.

        Args:
            owner: Repository owner login.
            repo: Repository name.
            sha: Commit SHA.

        Returns:
            Files in the order GitHub reports them.

        Raises:
            GitHubAPIError: On transport errors, non-200 status or bad body.
        """
        url = f"{self.api_url}/repos/{owner}/{repo}/commits/{sha}"
        try:
            if self.http_client is not None:
                response = self.http_client.get(url, headers=self.headers)
            else:
                with httpx.Client() as client:
                    response = client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"Error making GitHub API request: {e}") from e

        if response.status_code != 200:
            raise GitHubAPIError(
                f"GitHub API request failed with status {response.status_code} "
                f"for commit {sha}: {response.text}"
            )

        try:
            details = CommitDetails.model_validate_json(response.content)
        except ValidationError as e:
            raise GitHubAPIError(f"Error decoding GitHub API response: {e}") from e
        return details.files


def changed_paths(
    files: Iterable[CommitFile],
    ignored_prefixes: Iterable[str] = (),
    ignored_files: Iterable[str] = (),
) -> list[str]:
    """
    Select the added/modified student files from a commit.

    Args:
        files: Commit files from the API.
        ignored_prefixes: Path prefixes that belong to the grader itself.
        ignored_files: Exact paths to skip (e.g. the instructions file).

    Returns:
        Repository-relative paths, in API order.
    """
    prefixes = tuple(ignored_prefixes)
    skipped = set(ignored_files)
    paths = []
    for file in files:
        if not file.is_relevant:
            continue
        if file.filename in skipped or (prefixes and file.filename.startswith(prefixes)):
            print(f"  Skipping internal/config file: {file.filename}")
            continue
        paths.append(file.filename)
    return paths
