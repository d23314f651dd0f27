"""
cli.py – Command-line front end for the study-aids engine

Run:
    study-aids chapters
    study-aids chapter 4
    study-aids quiz 4 --answers '[1, [0, 2]]'
    study-aids exam --count 35 --show-answers
    study-aids status

Uses the remote backend when STUDY_AIDS_API_URL is configured, otherwise the
local engine over the bundled catalog.
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Any, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from study_aids import __version__
from study_aids.catalog import CatalogError
from study_aids.config import get_settings
from study_aids.guardrails import GuardrailLevel, GuardrailsPipeline
from study_aids.models import Lesson, MultiChoiceItem, NumericItem, SubmissionSummary
from study_aids.service import LessonNotFound, StudyAidsService

console = Console()

LEVEL_STYLE = {
    GuardrailLevel.BLOCK: "bold red",
    GuardrailLevel.WARN:  "bold yellow",
    GuardrailLevel.INFO:  "cyan",
}


# ─── Display helpers ─────────────────────────────────────────────────────────

def show_chapters(service: StudyAidsService) -> None:
    table = Table(box=box.SIMPLE_HEAVY, title="Chapters")
    table.add_column("#",      justify="right", style="bold cyan")
    table.add_column("Id",     style="dim")
    table.add_column("Title",  style="white")
    table.add_column("Points", justify="right")
    table.add_column("Tags",   style="green")
    for lesson in service.get_chapters():
        table.add_row(
            str(lesson.number), escape(lesson.id), escape(lesson.title),
            str(len(lesson.teaching_points)), escape(", ".join(lesson.tags)),
        )
    console.print(table)


def _bullets(lines: Sequence[str]) -> str:
    return "\n".join(f"• {escape(line)}" for line in lines)


def show_chapter(lesson: Lesson) -> None:
    """Render every field of one chapter."""
    console.rule(f"[bold magenta]Chapter {lesson.number}: {escape(lesson.title)}[/bold magenta]")
    if lesson.summary:
        console.print(Panel(escape(lesson.summary), title="Summary", border_style="blue"))

    for heading, lines in (
        ("Objectives", lesson.objectives),
        ("Teaching points", lesson.teaching_points),
        ("Key takeaways", lesson.key_takeaways),
    ):
        if lines:
            console.print(Panel(_bullets(lines), title=heading, border_style="cyan"))

    if lesson.applications:
        table = Table(box=box.SIMPLE_HEAVY, title="Applications")
        table.add_column("Context", style="bold")
        table.add_column("Examples")
        for app in lesson.applications:
            table.add_row(escape(app.context), _bullets(app.items))
        console.print(table)

    for res in lesson.resources:
        console.print(f"[dim]Resource:[/dim] {escape(res.label)} ({escape(res.url)})")
    if lesson.tags:
        console.print(f"[green]Tags:[/green] {escape(', '.join(lesson.tags))}")


def _answer_text(item: Any) -> str:
    if isinstance(item, NumericItem):
        return f"{item.answer_key:g}"
    if isinstance(item, MultiChoiceItem):
        return ", ".join(str(i) for i in sorted(item.answer_key))
    return str(item.answer_key)


def show_questions(items: Sequence[Any], title: str, show_answers: bool = False) -> None:
    console.rule(f"[bold magenta]{title}[/bold magenta]")
    for n, item in enumerate(items, start=1):
        body = Table(box=None, show_header=False, padding=(0, 1))
        body.add_column("Idx", style="bold cyan", no_wrap=True)
        body.add_column("Option")
        for i, opt in enumerate(getattr(item, "options", ())):
            body.add_row(str(i), escape(opt))
        if show_answers:
            body.add_row("[green]key[/green]", f"[green]{_answer_text(item)}[/green]")
        console.print(Panel(
            body,
            title=f"[bold]{n}. {escape(item.prompt)}[/bold]",
            subtitle=f"[dim]{item.id} · {item.kind}[/dim]",
            border_style="blue",
        ))


def show_summary(summary: SubmissionSummary) -> None:
    table = Table(box=box.ROUNDED)
    table.add_column("Question", style="dim")
    table.add_column("Result")
    table.add_column("Explanation")
    for r in summary.results:
        mark = "[bold green]correct[/bold green]" if r.correct else "[bold red]incorrect[/bold red]"
        table.add_row(escape(r.id), mark, escape(r.explanation or ""))
    console.print(table)
    console.print(
        f"[bold]Score: {summary.score}/{summary.total}[/bold] "
        f"[dim]({summary.score_pct:.0f}%)[/dim]"
    )


def show_status(service: StudyAidsService) -> None:
    settings = get_settings()
    table = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    table.add_column("Key",   style="bold cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("Version", __version__)
    for key, value in settings.status_summary().items():
        table.add_row(key, value)
    table.add_row("Lessons", str(len(service.engine.catalog)))
    console.print(Panel(table, title="[bold]Study Aids[/bold]", border_style="magenta"))

    result = GuardrailsPipeline().check_catalog(service.engine.catalog, service.engine.curated)
    if not result.violations:
        console.print("[bold green]All guardrails passed.[/bold green]")
    for v in result.violations:
        console.print(f"[{LEVEL_STYLE[v.level]}]{v.level.value}[/] [{v.code}] {escape(v.message)}")


# ─── Argument handling ───────────────────────────────────────────────────────

def _parse_answers(parser: argparse.ArgumentParser, raw: Optional[str]) -> Optional[list]:
    if raw is None:
        return None
    try:
        answers = json.loads(raw)
    except json.JSONDecodeError as exc:
        parser.error(f"--answers is not valid JSON: {exc}")
    if not isinstance(answers, list):
        parser.error("--answers must be a JSON list")
    return answers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="study-aids", description="Study-aids quizzes and exams.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("chapters", help="List catalog chapters")
    chapter = sub.add_parser("chapter", help="Show one chapter in full")
    chapter.add_argument("lesson_id")
    sub.add_parser("status", help="Show configuration and content guardrails")

    quiz = sub.add_parser("quiz", help="Show (and optionally grade) a chapter quiz")
    quiz.add_argument("lesson_id")
    quiz.add_argument("--answers", help="JSON list of answers to grade")
    quiz.add_argument("--show-answers", action="store_true")

    exam = sub.add_parser("exam", help="Show (and optionally grade) the final exam")
    exam.add_argument("--count", type=int, default=None)
    exam.add_argument("--answers", help="JSON list of answers to grade")
    exam.add_argument("--show-answers", action="store_true")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=get_settings().app.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        service = StudyAidsService.from_settings()
    except CatalogError as exc:
        parser.exit(2, f"{parser.prog}: error: {exc}\n")

    with service:
        if args.command == "chapters":
            show_chapters(service)
        elif args.command == "chapter":
            try:
                lesson = service.get_chapter(args.lesson_id)
            except LessonNotFound as exc:
                parser.exit(1, f"{parser.prog}: {exc.args[0]}\n")
            show_chapter(lesson)
        elif args.command == "status":
            show_status(service)
        elif args.command == "quiz":
            answers = _parse_answers(parser, args.answers)
            try:
                title = f"Chapter {service.get_chapter(args.lesson_id).number} quiz"
            except LessonNotFound:
                title = f"Chapter {args.lesson_id} quiz (not in catalog)"
            show_questions(service.get_quiz(args.lesson_id), title, args.show_answers)
            if answers is not None:
                show_summary(service.submit_quiz(args.lesson_id, answers))
        elif args.command == "exam":
            answers = _parse_answers(parser, args.answers)
            items = service.get_final_exam(args.count)
            show_questions(items, f"Final exam ({len(items)} questions)", args.show_answers)
            if answers is not None:
                show_summary(service.submit_final_exam(answers, args.count))
    return 0


def main_entry() -> None:
    raise SystemExit(main())
