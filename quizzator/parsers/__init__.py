"""Quiz definition parsing and discovery."""

from .quiz_finder import QuizFileInfo, find_all_quizzes, load_quiz_from_file
from .yaml_parser import extract_quiz_from_markdown, parse_quiz_yaml

__all__ = [
    "parse_quiz_yaml",
    "extract_quiz_from_markdown",
    "find_all_quizzes",
    "load_quiz_from_file",
    "QuizFileInfo",
]
