"""
Configuration constants for the Push Grader system.
"""

from pathlib import Path


# Execution configuration
EXECUTION_TIMEOUT_SECONDS: float = 10.0
COMPILED_EXECUTABLE_NAME: str = "student_executable"
DEFAULT_BUILD_DIR: Path = Path("build")

# File patterns
HOMEWORK_INSTRUCTIONS_FILENAME: str = "homework0e3.txt"
DEFAULT_CONFIG_FILENAME: str = "grader_config.yml"
# Paths inside the repository that belong to the grader, not to the student
IGNORED_PREFIXES: list[str] = ["correctness-tester/", ".github/"]

# GitHub configuration
GITHUB_API_URL: str = "https://api.github.com"
GITHUB_API_VERSION: str = "2022-11-28"
RELEVANT_FILE_STATUSES: tuple[str, ...] = ("added", "modified")

# Language model configuration
# Gemini is reached through its OpenAI-compatible endpoint
LLM_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta/openai/"
LLM_MODEL: str = "gemini-2.0-flash"
MAX_TOKENS: int = 4096
TEST_CASE_COUNT: int = 5

# CI text protocol
ERROR_ANNOTATION: str = "::error::"

# Prompt templates
REVIEW_PROMPT_TEMPLATE: str = """You are an AI assistant specialized in evaluating code against homework instructions.
Your task is to analyze the provided code snippets (which may be in various programming languages) and determine if they correctly implement the requirements described in the homework instructions.
Focus on correctness, completeness, and adherence to the problem statement. Do not focus on style unless explicitly mentioned in the instructions.

---
Homework Instructions:
{instructions}
---

---
Provided Code Files:
{code}
---

Based on the above, please provide a concise evaluation.
If the code is correct and complete according to the instructions, state "APPROVED" and provide a brief justification.
If there are issues, state "REJECTED" and explain clearly what needs to be fixed or improved.
Be specific and actionable in your feedback, referencing specific parts of the code or instructions if necessary.
"""

ENTRY_POINT_PROMPT_TEMPLATE: str = (
    "You are a code analysis expert. Given the following list of filenames from a "
    "student's project, identify the single most likely main entry-point file. "
    "Respond with ONLY the filename and nothing else. FILENAMES: {filenames}"
)

TEST_GENERATION_PROMPT_TEMPLATE: str = """You are an expert Test Case Generator AI. Based on the provided homework instructions, create {count} diverse and effective test cases.
Each test case feeds "input" to the program's standard input and compares the program's standard output with "expected_output".
Your response MUST be a single, valid JSON object with this exact shape:
{{"test_cases": [{{"description": "...", "input": "...", "expected_output": "..."}}]}}
---
Homework Instructions:
{instructions}
---
"""
