"""Parse quiz definitions written in YAML, standalone or embedded in markdown."""

import re
from typing import Any, Optional

import yaml
from pydantic import ValidationError

from quizzator.errors import QuizParseError
from quizzator.models.question import (
    FreeTextQuestion,
    MCQQuestion,
    Question,
    QuestionType,
    SliderQuestion,
    TrueFalseQuestion,
)
from quizzator.models.quiz import Quiz, QuizScoring

_QUIZ_BLOCK_RE = re.compile(r"```quiz\s*\n(.*?)\n```", re.DOTALL)
_FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---", re.DOTALL)


def parse_quiz_yaml(content: str) -> Quiz:
    """
    Parse a YAML quiz definition.

    Both a ``quiz:`` root key and top-level properties are accepted.

    Args:
        content: YAML text

    Returns:
        Validated Quiz

    Raises:
        QuizParseError: If the YAML is invalid or the quiz is malformed
    """
    try:
        return _build_quiz(content)
    except QuizParseError as e:
        raise QuizParseError(f"Failed to parse quiz YAML: {e}") from e
    except yaml.YAMLError as e:
        raise QuizParseError(f"Failed to parse quiz YAML: {e}") from e


def _build_quiz(content: str) -> Quiz:
    parsed = yaml.safe_load(content)
    if not isinstance(parsed, dict):
        raise QuizParseError("Quiz definition must be a mapping")

    quiz_data = parsed.get("quiz", parsed)
    if not isinstance(quiz_data, dict):
        raise QuizParseError("Quiz definition must be a mapping")

    if not quiz_data.get("title"):
        raise QuizParseError("Quiz must have a title")

    scoring_data = quiz_data.get("scoring")
    if not isinstance(scoring_data, dict):
        raise QuizParseError("Quiz must have scoring configuration")

    questions_data = quiz_data.get("questions")
    if not isinstance(questions_data, list):
        raise QuizParseError("Quiz must have a questions array")

    scoring = _parse_scoring(scoring_data)
    questions = [_parse_question(q, index) for index, q in enumerate(questions_data)]

    try:
        return Quiz(
            title=str(quiz_data["title"]),
            description=quiz_data.get("description"),
            scoring=scoring,
            questions=questions,
        )
    except ValidationError as e:
        raise QuizParseError(_first_error(e)) from e


def _parse_scoring(data: dict[str, Any]) -> QuizScoring:
    pass_threshold = data.get("min_score_to_pass")
    fail_threshold = data.get("min_score_to_fail")
    try:
        return QuizScoring(
            min_score_to_pass=80 if pass_threshold is None else pass_threshold,
            min_score_to_fail=60 if fail_threshold is None else fail_threshold,
        )
    except ValidationError as e:
        raise QuizParseError(_first_error(e)) from e


def _parse_question(data: Any, index: int) -> Question:
    """
    Parse a single question mapping.

    Args:
        data: Question mapping from YAML
        index: Zero-based position, reported one-based in errors

    Returns:
        The matching question model
    """
    number = index + 1
    if not isinstance(data, dict):
        raise QuizParseError(f"Question {number} must be a mapping")

    if not data.get("q"):
        raise QuizParseError(f'Question {number} must have a "q" field')

    weight = data.get("weight")
    weight = 1 if weight is None else weight
    if not isinstance(weight, (int, float)) or isinstance(weight, bool) or weight <= 0:
        raise QuizParseError(f"Question {number} weight must be positive")

    kind = data.get("type")
    answer = data.get("answer")

    try:
        if kind == QuestionType.FREE_TEXT.value:
            return FreeTextQuestion(
                q=data["q"],
                answer="" if answer is None else str(answer),
                context=data.get("context"),
                weight=weight,
            )

        if kind == QuestionType.MCQ.value:
            options = data.get("options")
            if not isinstance(options, list) or len(options) < 2:
                raise QuizParseError(f"Question {number} (MCQ) must have at least 2 options")
            if not isinstance(answer, list):
                raise QuizParseError(f"Question {number} (MCQ) answer must be an array")
            return MCQQuestion(
                q=data["q"],
                options=[str(o) for o in options],
                answer=[str(a) for a in answer],
                multiple=bool(data.get("multiple", False)),
                weight=weight,
            )

        if kind == QuestionType.SLIDER.value:
            if not _is_number(answer):
                raise QuizParseError(f"Question {number} (slider) answer must be a number")
            if not _is_number(data.get("min")) or not _is_number(data.get("max")):
                raise QuizParseError(f"Question {number} (slider) must have min and max values")
            if data["min"] >= data["max"]:
                raise QuizParseError(f"Question {number} (slider) min must be < max")
            step = data.get("step")
            return SliderQuestion(
                q=data["q"],
                answer=answer,
                min=data["min"],
                max=data["max"],
                step=1 if step is None else step,
                tolerance=data.get("tolerance"),
                weight=weight,
            )

        if kind == QuestionType.TRUE_FALSE.value:
            if not isinstance(answer, bool):
                raise QuizParseError(f"Question {number} (true-false) answer must be a boolean")
            return TrueFalseQuestion(q=data["q"], answer=answer, weight=weight)

    except ValidationError as e:
        raise QuizParseError(f"Question {number} ({kind}): {_first_error(e)}") from e

    raise QuizParseError(f"Question {number} has invalid type: {kind}")


def extract_quiz_from_markdown(content: str) -> Optional[str]:
    """
    Extract the quiz YAML from a markdown document.

    A ```quiz fenced block wins; otherwise YAML front matter is used when it
    looks like a quiz definition.

    Args:
        content: Markdown text

    Returns:
        The YAML text, or None when the document holds no quiz
    """
    block = _QUIZ_BLOCK_RE.search(content)
    if block:
        return block.group(1)

    frontmatter = _FRONTMATTER_RE.match(content)
    if frontmatter:
        yaml_content = frontmatter.group(1)
        if "quiz:" in yaml_content or "title:" in yaml_content:
            return yaml_content

    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    return first["msg"].removeprefix("Value error, ")
