"""
Pydantic models for the Push Grader system.

Defines structured data types for the GitHub webhook payload, the commits
API response, generated test cases and test execution results.
"""

from pydantic import BaseModel, Field

from .config import RELEVANT_FILE_STATUSES


class HeadCommit(BaseModel):
    """Head commit reference from the push payload."""

    id: str = Field(default="", description="Commit SHA")


class RepositoryOwner(BaseModel):
    """Repository owner from the push payload."""

    login: str = Field(default="", description="Owner login")


class Repository(BaseModel):
    """Repository identity from the push payload."""

    name: str = Field(default="", description="Repository name")
    owner: RepositoryOwner = Field(default_factory=RepositoryOwner)


class PushCommit(BaseModel):
    """A single commit entry listed in the push payload."""

    added: list[str] = Field(default_factory=list, description="Added file paths")
    modified: list[str] = Field(default_factory=list, description="Modified file paths")
    removed: list[str] = Field(default_factory=list, description="Removed file paths")


class PushEvent(BaseModel):
    """
    GitHub push webhook payload.

    Attributes:
        head_commit: The commit the push points to (null on branch deletion).
        repository: Repository name and owner.
        commits: Commits included in the push.
    """

    head_commit: HeadCommit | None = Field(default=None, description="Pushed head commit")
    repository: Repository = Field(default_factory=Repository)
    commits: list[PushCommit] = Field(default_factory=list, description="Pushed commits")

    @property
    def head_commit_id(self) -> str:
        return self.head_commit.id if self.head_commit else ""

    @property
    def repo_owner(self) -> str:
        return self.repository.owner.login

    @property
    def repo_name(self) -> str:
        return self.repository.name

    @property
    def changed_files(self) -> list[str]:
        """Added and modified paths across all commits, in first-seen order."""
        seen: dict[str, None] = {}
        for commit in self.commits:
            for path in commit.added + commit.modified:
                seen.setdefault(path, None)
        return list(seen)


class CommitFile(BaseModel):
    """
    A file entry from the commits API response.

    Attributes:
        filename: Repository-relative path.
        status: Change status (added, modified, removed, renamed, ...).
    """

    filename: str = Field(..., description="Repository-relative file path")
    status: str = Field(..., description="Change status reported by GitHub")

    @property
    def is_relevant(self) -> bool:
        return self.status in RELEVANT_FILE_STATUSES


class CommitDetails(BaseModel):
    """Subset of the commits API response used for grading."""

    files: list[CommitFile] = Field(default_factory=list, description="Changed files")


class TestCase(BaseModel):
    """
    A single generated functional test case.

    Attributes:
        description: Short explanation of what the case checks.
        input: Text written to the program's standard input.
        expected_output: Expected standard output.
    """

    __test__ = False

    description: str = Field(default="", description="What the case checks")
    input: str = Field(default="", description="Standard input for the program")
    expected_output: str = Field(..., description="Expected standard output")


class TestCaseSuite(BaseModel):
    """
    Structured test cases as returned by the language model.
    """

    __test__ = False

    test_cases: list[TestCase] = Field(default_factory=list, description="Generated test cases")


class CaseResult(BaseModel):
    """
    Result from running the student program on one test case.

    Attributes:
        case: The executed test case.
        passed: Whether the program exited cleanly with the expected output.
        actual_output: Trimmed standard output.
        stderr: Captured standard error.
        exit_code: Process exit code (None if the process never ran).
        error_message: Spawn or exit failure description.
        timed_out: Whether the run was killed after the timeout.
    """

    case: TestCase
    passed: bool = Field(..., description="Whether the case passed")
    actual_output: str = Field(default="", description="Trimmed standard output")
    stderr: str = Field(default="", description="Captured standard error")
    exit_code: int | None = Field(default=None, description="Process exit code")
    error_message: str = Field(default="", description="Execution error, if any")
    timed_out: bool = Field(default=False, description="Whether the timeout was exceeded")


class RunSummary(BaseModel):
    """
    Aggregated results of a functional test run.
    """

    language: str = Field(..., description="Detected language name")
    results: list[CaseResult] = Field(default_factory=list, description="Per-case results")

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total

    def summary_line(self) -> str:
        return (
            f"Passed {self.passed} out of {self.total} test cases "
            f"for the {self.language} project."
        )


class ReviewVerdict(BaseModel):
    """
    Qualitative review feedback from the language model.

    Attributes:
        feedback: Full model answer.
        rejected: Whether the answer contains "REJECTED" in any letter case.
    """

    feedback: str = Field(..., description="Model feedback text")
    rejected: bool = Field(..., description="Whether the code was rejected")

    @classmethod
    def from_feedback(cls, feedback: str) -> "ReviewVerdict":
        return cls(feedback=feedback, rejected="REJECTED" in feedback.upper())
