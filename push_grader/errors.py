"""
Exception hierarchy for the Push Grader system.

Every fatal condition raised by a pipeline stage derives from GraderError,
so the command line entrypoint can report it and set the exit status in
one place.
"""


class GraderError(Exception):
    """Base class for fatal grading errors."""


class ConfigurationError(GraderError):
    """Raised when required configuration or environment is missing."""


class EventPayloadError(GraderError):
    """Raised when the webhook payload cannot be read or is incomplete."""


class GitHubAPIError(GraderError):
    """Raised when the commits API request fails."""


class LanguageDetectionError(GraderError):
    """Raised when the changed files do not map to a single language."""


class MixedLanguageError(LanguageDetectionError):
    """Raised when a push touches files of more than one language."""

    def __init__(self, languages: list[str]) -> None:
        self.languages = languages
        super().__init__(
            f"Mixed language push: changes found for {', '.join(languages)}. "
            "Only one language per push can be tested."
        )


class EntryPointError(GraderError):
    """Raised when no single entry point can be resolved."""


class LLMResponseError(GraderError):
    """Raised when the language model call fails."""


class EmptyResponseError(LLMResponseError):
    """Raised when the language model returns no text."""


class MalformedResponseError(LLMResponseError):
    """Raised when the language model response has an unexpected shape."""


class TestGenerationError(GraderError):
    """Raised when generated test cases cannot be used."""

    __test__ = False


class CompilationError(GraderError):
    """Raised when the student code fails to compile."""

    def __init__(self, message: str, output: str = "") -> None:
        self.output = output
        super().__init__(f"{message}\nCompiler Output:\n{output}" if output else message)
