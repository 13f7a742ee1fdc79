"""Tests for configuration and environment loading."""

from pathlib import Path

import pytest

from push_grader.config_loader import GraderConfig, load_config, load_environment, read_instructions
from push_grader.errors import ConfigurationError


def test_defaults():
    config = load_config(None)

    assert config.repo_root == Path(".")
    assert config.instructions_path == Path("homework0e3.txt")
    assert config.test_case_count == 5
    assert config.execution_timeout_seconds == 10.0
    assert "correctness-tester/" in config.ignored_prefixes


def test_yaml_paths_resolve_against_config_dir(tmp_path):
    config_dir = tmp_path / "correctness-tester"
    config_dir.mkdir()
    config_file = config_dir / "grader_config.yml"
    config_file.write_text(
        "repo_root: ..\n"
        "build_dir: out\n"
        "instructions_file: hw/instructions.txt\n"
        "model: gemini-1.5-flash\n"
        "execution_timeout_seconds: null\n",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.repo_root == config_dir / ".."
    assert config.build_dir == config_dir / "out"
    assert config.instructions_path == config_dir / ".." / "hw/instructions.txt"
    assert config.model == "gemini-1.5-flash"
    assert config.execution_timeout_seconds is None


def test_empty_yaml_gives_defaults(tmp_path):
    config_file = tmp_path / "grader_config.yml"
    config_file.write_text("", encoding="utf-8")

    assert load_config(config_file) == GraderConfig()


def test_missing_config_is_fatal(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "missing.yml")


@pytest.mark.parametrize(
    "content",
    [
        "test_case_count: 0\n",
        "execution_timeout_seconds: -1\n",
        "repo_root: [unclosed\n",
        "- just\n- a list\n",
    ],
)
def test_invalid_config_is_fatal(tmp_path, content):
    config_file = tmp_path / "grader_config.yml"
    config_file.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(config_file)


def test_load_environment():
    env = load_environment(
        {
            "GITHUB_EVENT_PATH": "/tmp/event.json",
            "GITHUB_TOKEN": "ghs_x",
            "GEMINI_API_KEY": "",
            "OPENAI_API_KEY": "sk-x",
            "GITHUB_STEP_SUMMARY": "",
        }
    )

    assert env.require_event_path() == Path("/tmp/event.json")
    assert env.require_github_token() == "ghs_x"
    assert env.require_llm_api_key() == "sk-x"
    assert env.step_summary_path is None


def test_gemini_key_takes_priority():
    env = load_environment({"GEMINI_API_KEY": "g", "OPENAI_API_KEY": "o"})

    assert env.llm_api_key == "g"


@pytest.mark.parametrize(
    "method, variable",
    [
        ("require_event_path", "GITHUB_EVENT_PATH"),
        ("require_github_token", "GITHUB_TOKEN"),
        ("require_llm_api_key", "GEMINI_API_KEY"),
    ],
)
def test_missing_environment_is_fatal(method, variable):
    env = load_environment({})

    with pytest.raises(ConfigurationError, match=variable):
        getattr(env, method)()


def test_read_instructions(tmp_path):
    path = tmp_path / "homework.txt"
    path.write_text("Remove duplicate characters.", encoding="utf-8")

    assert read_instructions(path) == "Remove duplicate characters."
    with pytest.raises(ConfigurationError, match="homework instructions"):
        read_instructions(tmp_path / "missing.txt")
