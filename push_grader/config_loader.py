"""
Configuration loader for the Push Grader system.

Handles parsing and validation of the optional YAML configuration file and
of the environment variables provided by GitHub Actions.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .config import (
    DEFAULT_BUILD_DIR,
    EXECUTION_TIMEOUT_SECONDS,
    GITHUB_API_URL,
    HOMEWORK_INSTRUCTIONS_FILENAME,
    IGNORED_PREFIXES,
    LLM_BASE_URL,
    LLM_MODEL,
    TEST_CASE_COUNT,
)
from .errors import ConfigurationError


class GraderConfig(BaseModel):
    """
    Configuration model for the grader.
    """
    repo_root: Path = Field(Path("."), description="Checkout root that commit paths are relative to")
    instructions_file: str = Field(HOMEWORK_INSTRUCTIONS_FILENAME, description="Homework instructions path, relative to repo_root")
    build_dir: Path = Field(DEFAULT_BUILD_DIR, description="Directory for compiled student binaries")
    ignored_prefixes: list[str] = Field(default_factory=lambda: list(IGNORED_PREFIXES), description="Repository paths that are never graded")

    github_api_url: str = Field(GITHUB_API_URL, description="GitHub REST API base URL")
    model: str = Field(LLM_MODEL, description="Language model name")
    llm_base_url: Optional[str] = Field(LLM_BASE_URL, description="OpenAI-compatible endpoint of the model service")

    test_case_count: int = Field(TEST_CASE_COUNT, ge=1, description="Number of test cases to request")
    execution_timeout_seconds: Optional[float] = Field(EXECUTION_TIMEOUT_SECONDS, gt=0, description="Per-case timeout, null disables it")
    verbose: bool = Field(False, description="Enable verbose output")

    @property
    def instructions_path(self) -> Path:
        return self.repo_root / self.instructions_file


class Environment(BaseModel):
    """
    Values read from the GitHub Actions environment.
    """
    event_path: Optional[Path] = Field(None, description="GITHUB_EVENT_PATH")
    github_token: Optional[str] = Field(None, description="GITHUB_TOKEN")
    llm_api_key: Optional[str] = Field(None, description="GEMINI_API_KEY or OPENAI_API_KEY")
    step_summary_path: Optional[Path] = Field(None, description="GITHUB_STEP_SUMMARY")

    def require_event_path(self) -> Path:
        if not self.event_path:
            raise ConfigurationError(
                "GITHUB_EVENT_PATH environment variable not set. "
                "This script should run in a GitHub Actions workflow."
            )
        return self.event_path

    def require_github_token(self) -> str:
        if not self.github_token:
            raise ConfigurationError(
                "GITHUB_TOKEN environment variable not set. It is required for GitHub API calls. "
                "Ensure your workflow has 'permissions: contents: read'."
            )
        return self.github_token

    def require_llm_api_key(self) -> str:
        if not self.llm_api_key:
            raise ConfigurationError(
                "GEMINI_API_KEY environment variable not set. Please add it as a GitHub Secret."
            )
        return self.llm_api_key


def load_environment(environ: Mapping[str, str] | None = None) -> Environment:
    """
    Collect the GitHub Actions variables used by the grader.

    Empty values are treated as unset.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Environment object.
    """
    if environ is None:
        environ = os.environ

    def get(name: str) -> str | None:
        return environ.get(name) or None

    return Environment(
        event_path=get("GITHUB_EVENT_PATH"),
        github_token=get("GITHUB_TOKEN"),
        llm_api_key=get("GEMINI_API_KEY") or get("OPENAI_API_KEY"),
        step_summary_path=get("GITHUB_STEP_SUMMARY"),
    )


def load_config(config_path: Path | None = None) -> GraderConfig:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file. None returns defaults.

    Returns:
        GraderConfig object with loaded values.

    Raises:
        ConfigurationError: If the file doesn't exist, is invalid YAML,
            or holds invalid values.
    """
    if config_path is None:
        return GraderConfig()

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not config_data:
        return GraderConfig()
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration in {config_path} must be a mapping")

    # Resolve relative paths relative to the config file location
    config_dir = config_path.parent
    for path_field in ["repo_root", "build_dir"]:
        if path_field in config_data and config_data[path_field]:
            path = Path(config_data[path_field])
            if not path.is_absolute():
                config_data[path_field] = config_dir / path

    try:
        return GraderConfig(**config_data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e


def read_instructions(instructions_path: Path) -> str:
    """
    Read the homework instructions file.

    Raises:
        ConfigurationError: If the file is missing or unreadable.
    """
    try:
        return instructions_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Error reading homework instructions file '{instructions_path}': {e}"
        ) from e
