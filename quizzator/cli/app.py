"""Typer CLI application for taking quizzes."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from quizzator import __version__
from quizzator.config.settings import Settings, get_settings
from quizzator.errors import QuizzatorError
from quizzator.judges.base import Judge
from quizzator.judges.factory import create_judge
from quizzator.models.question import (
    FreeTextQuestion,
    MCQQuestion,
    Question,
    QuestionResult,
    QuestionStatus,
    SliderQuestion,
    TrueFalseQuestion,
    UserAnswer,
)
from quizzator.models.quiz import QuizResult
from quizzator.parsers.quiz_finder import find_all_quizzes, load_quiz_from_file
from quizzator.scoring.evaluators import format_number
from quizzator.session.quiz_session import QuizSession, SessionPhase

app = typer.Typer(
    name="quizzator",
    help="Take markdown quizzes with automatic and LLM-graded answers",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    QuestionStatus.PASSED: ("green", "✓", "Correct"),
    QuestionStatus.IMPRECISE: ("yellow", "~", "Imprecise"),
    QuestionStatus.FAILED: ("red", "✗", "Incorrect"),
}


def setup_logging(level: str) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command("list")
def list_quizzes(
    folder: Optional[Path] = typer.Option(
        None,
        "--folder",
        "-f",
        help="Folder to scan (defaults to QUIZ_FOLDER)",
    ),
) -> None:
    """List the quizzes found in a folder."""
    settings = get_settings()
    root = folder or Path(settings.quiz_folder)

    quizzes = find_all_quizzes(root)
    if not quizzes:
        console.print(f"[yellow]No quizzes found in {root}[/yellow]")
        return

    table = Table(title="Quizzes", border_style="cyan")
    table.add_column("Title", style="cyan")
    table.add_column("Questions", style="white")
    table.add_column("Path", style="dim")

    for info in quizzes:
        table.add_row(info.quiz.title, str(info.quiz.total_questions), str(info.path))

    console.print()
    console.print(table)


@app.command()
def check() -> None:
    """Test the connection to the configured judge."""
    settings = get_settings()
    judge = build_judge(settings)

    console.print(f"[cyan]Testing {judge.name} connection ({judge.model})...[/cyan]")
    if asyncio.run(judge.test_connection()):
        console.print(f"[green]✓[/green] {judge.name} is reachable.")
    else:
        console.print(f"[red]Error:[/red] Failed to connect to {judge.name}, check your settings.")
        raise typer.Exit(code=1)


@app.command()
def take(
    path: Path = typer.Argument(..., help="Markdown or YAML file containing the quiz"),
    language: Optional[str] = typer.Option(
        None,
        "--language",
        "-l",
        help="Language for judge feedback (defaults to RESPONSE_LANGUAGE)",
    ),
) -> None:
    """
    Take a quiz interactively.

    Example:
        quizzator take notes/biology.md --language English
    """
    settings = get_settings()

    try:
        quiz = load_quiz_from_file(path)
    except QuizzatorError as e:
        console.print(f"[red]Error:[/red] Failed to launch quiz: {e}", style="bold")
        raise typer.Exit(code=1)

    judge: Optional[Judge] = None
    if quiz.has_free_text:
        judge = build_judge(settings)
        console.print("[cyan]Testing judge connection...[/cyan]")
        if not asyncio.run(judge.test_connection()):
            console.print(
                "[red]Error:[/red] Failed to connect to the judge, check your settings.",
                style="bold",
            )
            raise typer.Exit(code=1)

    console.print(
        Panel(
            quiz.description or f"{quiz.total_questions} questions",
            title=quiz.title,
            border_style="cyan",
        )
    )

    session = QuizSession(quiz, judge=judge, language=language or settings.response_language)

    while session.phase != SessionPhase.FINISHED:
        question = session.current_question
        console.print(
            f"\n[bold]Question {session.question_number}/{quiz.total_questions}[/bold]"
        )
        console.print(question.question_text)

        answer = ask_answer(question)
        result = run_evaluation(session, answer)
        if result is None:
            continue

        display_question_result(result)
        session.advance()

    display_quiz_result(session.quiz_result)


def build_judge(settings: Settings) -> Judge:
    """Create the configured judge or exit with an error."""
    try:
        return create_judge(settings)
    except QuizzatorError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


def run_evaluation(session: QuizSession, answer: UserAnswer) -> Optional[QuestionResult]:
    """
    Submit an answer, showing a spinner while it is graded.

    Returns:
        The result, or None when the user chose to answer again after an error
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("[cyan]Evaluating...", total=None)
            return asyncio.run(session.submit_answer(answer))
    except QuizzatorError as e:
        console.print(f"\n[red]Error:[/red] {e}", style="bold")
        if Confirm.ask("Answer this question again?", default=True, console=console):
            return None
        raise typer.Exit(code=1)


def ask_answer(question: Question) -> UserAnswer:
    """Prompt for an answer shaped for the question kind."""
    if isinstance(question, FreeTextQuestion):
        while True:
            text = Prompt.ask("Your answer", console=console).strip()
            if text:
                return text
            console.print("[yellow]Please give an answer.[/yellow]")

    if isinstance(question, MCQQuestion):
        for i, option in enumerate(question.options, start=1):
            console.print(f"  [cyan]{i}.[/cyan] {option}")
        if not question.multiple:
            choice = IntPrompt.ask(
                "Your choice",
                choices=[str(i) for i in range(1, len(question.options) + 1)],
                show_choices=False,
                console=console,
            )
            return [question.options[choice - 1]]
        while True:
            raw = Prompt.ask("Your choices (comma-separated numbers)", console=console)
            selected = parse_selection(raw, len(question.options))
            if selected:
                return [question.options[i - 1] for i in selected]
            console.print("[yellow]Select at least one valid option number.[/yellow]")

    if isinstance(question, SliderQuestion):
        low, high = format_number(question.min), format_number(question.max)
        while True:
            value = FloatPrompt.ask(f"Your value ({low} to {high})", console=console)
            if question.min <= value <= question.max:
                return value
            console.print(f"[yellow]Value must be between {low} and {high}.[/yellow]")

    if isinstance(question, TrueFalseQuestion):
        choice = Prompt.ask("True or false", choices=["true", "false"], console=console)
        return choice == "true"

    raise TypeError(f"Unsupported question: {question!r}")


def parse_selection(raw: str, option_count: int) -> list[int]:
    """
    Parse comma-separated option numbers.

    Returns:
        Unique one-based option numbers in input order, or an empty list if
        any entry is invalid
    """
    selected: list[int] = []
    for part in raw.replace(" ", "").split(","):
        if not part:
            continue
        if not part.isdigit() or not 1 <= int(part) <= option_count:
            return []
        if int(part) not in selected:
            selected.append(int(part))
    return selected


def format_user_answer(answer: UserAnswer) -> str:
    if isinstance(answer, bool):
        return "true" if answer else "false"
    if isinstance(answer, list):
        return ", ".join(answer)
    if isinstance(answer, (int, float)):
        return format_number(answer)
    return answer


def display_question_result(result: QuestionResult) -> None:
    """Display the verdict for one question."""
    color, icon, label = STATUS_STYLES[result.status]

    lines = [f"[bold {color}]{icon} {result.score}/100 - {label}[/bold {color}]"]
    if result.explanation:
        lines.append(result.explanation)
    if result.expected_answer:
        lines.append(f"[bold]Expected answer:[/bold] {result.expected_answer}")

    console.print(Panel("\n".join(lines), border_style=color))


def display_quiz_result(quiz_result: QuizResult) -> None:
    """Display the final score and the per-question breakdown."""
    color, _, _ = STATUS_STYLES[quiz_result.status]
    labels = {
        QuestionStatus.PASSED: "Passed",
        QuestionStatus.IMPRECISE: "Imprecise",
        QuestionStatus.FAILED: "Failed",
    }

    console.print(
        Panel(
            f"[bold {color}]{round(quiz_result.total_score)}/100 - "
            f"{labels[quiz_result.status]}[/bold {color}]\n"
            f"Points: {format_number(quiz_result.raw_score)} / "
            f"{format_number(quiz_result.max_score)}",
            title="Results",
            border_style=color,
        )
    )

    table = Table(title="Question Breakdown", border_style="cyan")
    table.add_column("#", style="cyan")
    table.add_column("Score", style="white")
    table.add_column("Your answer", style="white")
    table.add_column("Expected", style="white")

    for i, result in enumerate(quiz_result.question_results, start=1):
        result_color, icon, _ = STATUS_STYLES[result.status]
        table.add_row(
            f"[{result_color}]{icon}[/{result_color}] {i}",
            f"{result.score}/100",
            format_user_answer(result.user_answer),
            result.expected_answer or "",
        )

    console.print()
    console.print(table)


@app.command()
def info() -> None:
    """Display information about the quiz runner."""
    settings = get_settings()
    info_text = f"""
[bold cyan]Quizzator[/bold cyan]
Version: {__version__}

[bold]Question types:[/bold]
  • free-text - graded by an LLM judge
  • mcq - single or multiple selection, partial credit
  • slider - exact value or within a tolerance
  • true-false

[bold]Judge:[/bold] {settings.judge_provider.value}
[bold]Response language:[/bold] {settings.response_language}
    """
    console.print(Panel(info_text, title="Quizzator Info", border_style="cyan"))


@app.callback()
def callback() -> None:
    """
    Quizzator - take quizzes defined in markdown notes.
    """
    setup_logging(get_settings().log_level)


if __name__ == "__main__":
    app()
