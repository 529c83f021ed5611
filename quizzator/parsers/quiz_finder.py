"""Locate quiz files on disk."""

import logging
from pathlib import Path
from typing import NamedTuple

from quizzator.errors import QuizParseError
from quizzator.models.quiz import Quiz

from .yaml_parser import extract_quiz_from_markdown, parse_quiz_yaml

logger = logging.getLogger(__name__)


class QuizFileInfo(NamedTuple):
    """A markdown file and the quiz it defines."""

    path: Path
    quiz: Quiz


def find_all_quizzes(folder: str | Path) -> list[QuizFileInfo]:
    """
    Find every markdown file under ``folder`` that defines a valid quiz.

    Files without a quiz are ignored; files whose quiz does not parse are
    logged and skipped.

    Args:
        folder: Directory to scan recursively

    Returns:
        Quizzes sorted by file path
    """
    root = Path(folder).expanduser()
    if not root.is_dir():
        logger.warning("Quiz folder does not exist: %s", root)
        return []

    quiz_files: list[QuizFileInfo] = []

    for path in sorted(root.rglob("*.md")):
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s: %s", path, e)
            continue

        yaml_content = extract_quiz_from_markdown(content)
        if yaml_content is None:
            continue

        try:
            quiz_files.append(QuizFileInfo(path=path, quiz=parse_quiz_yaml(yaml_content)))
        except QuizParseError as e:
            logger.warning("Failed to parse quiz from %s: %s", path, e)

    return quiz_files


def load_quiz_from_file(path: str | Path) -> Quiz:
    """
    Load the quiz defined in a markdown (or plain YAML) file.

    Args:
        path: File to read

    Returns:
        Parsed Quiz

    Raises:
        QuizParseError: If the file cannot be read or holds no valid quiz
    """
    path = Path(path).expanduser()
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise QuizParseError(f"Cannot read {path}: {e}") from e

    if path.suffix.lower() in {".yaml", ".yml"}:
        return parse_quiz_yaml(content)

    yaml_content = extract_quiz_from_markdown(content)
    if yaml_content is None:
        raise QuizParseError("No quiz found in this file")

    return parse_quiz_yaml(yaml_content)
