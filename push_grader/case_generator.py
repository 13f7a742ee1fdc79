"""
Functional test case synthesis from homework instructions.
"""

import re

from pydantic import ValidationError

from .config import TEST_CASE_COUNT, TEST_GENERATION_PROMPT_TEMPLATE
from .errors import TestGenerationError
from .llm_client import TextModel
from .models import TestCase, TestCaseSuite

# Matches an opening fence such as ```json and a closing ```
_FENCE_START = re.compile(r"^\s*```[A-Za-z0-9_-]*\s*\n?")
_FENCE_END = re.compile(r"\n?\s*```\s*$")


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapped around a model answer."""
    text = text.strip()
    text = _FENCE_START.sub("", text, count=1)
    text = _FENCE_END.sub("", text, count=1)
    return text.strip()


def parse_test_cases(raw_text: str) -> list[TestCase]:
    """
    Decode the model's JSON answer into test cases.

    Args:
        raw_text: Model answer, possibly wrapped in Markdown fences.

    Returns:
        Test cases in the order received.

    Raises:
        TestGenerationError: If the answer is not valid JSON of the expected
            shape or holds no test cases.
    """
    try:
        suite = TestCaseSuite.model_validate_json(strip_code_fences(raw_text))
    except ValidationError as e:
        raise TestGenerationError(
            f"Failed to decode generated test cases: {e}\nRaw response:\n{raw_text}"
        ) from e

    if not suite.test_cases:
        raise TestGenerationError(f"The model generated no test cases.\nRaw response:\n{raw_text}")
    return suite.test_cases


def generate_test_cases(
    model: TextModel,
    instructions: str,
    count: int = TEST_CASE_COUNT,
) -> list[TestCase]:
    """
    Ask the model for functional test cases.

    Args:
        model: Text completion client.
        instructions: Homework instructions text.
        count: Number of cases to request.

    Returns:
        Parsed test cases.
    """
    prompt = TEST_GENERATION_PROMPT_TEMPLATE.format(count=count, instructions=instructions)
    raw_text = model.complete(prompt, json_mode=True)
    cases = parse_test_cases(raw_text)
    print(f"Successfully generated {len(cases)} test cases.")
    return cases
