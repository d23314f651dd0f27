"""
service.py — Study-aids service layer
=====================================
Caller-side wrapper that prefers the remote backend and falls back to the
local AssessmentEngine whenever the backend is disabled, unreachable, or
returns nothing usable.  The engine itself never performs I/O; all retry and
fallback policy lives here.

Fallback rules
--------------
  get_chapters       remote list only if it covers the whole local catalog
  get_chapter        remote record, else local lookup, else LessonNotFound
  get_quiz           remote items if non-empty, else local chapter quiz
  submit_quiz        remote summary, else local grading of the local quiz
  get_final_exam     remote items (truncated to N) if non-empty, else local exam
  submit_final_exam  remote summary, else local grading of the local exam

Every quiz and exam handed out passes through the question-set guardrails;
violations are logged, never raised.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Sequence, TypeVar

from study_aids.catalog import (
    CuratedBank,
    default_catalog,
    load_catalog,
    load_curated_bank,
)
from study_aids.config import Settings, get_settings
from study_aids.engine import AssessmentEngine
from study_aids.guardrails import GuardrailLevel, GuardrailResult, GuardrailsPipeline
from study_aids.models import Lesson, StudyModule, SubmissionSummary
from study_aids.remote import RemoteUnavailable, StudyAidsClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LessonNotFound(LookupError):
    """Neither the backend nor the local catalog knows the lesson."""


def _log_violations(result: GuardrailResult) -> None:
    for v in result.violations:
        level = logging.INFO if v.level == GuardrailLevel.INFO else logging.WARNING
        logger.log(level, "[%s] %s", v.code, v.message)


class StudyAidsService:
    """
    Remote-first access to chapters, quizzes, exams and grading.

    Usage::

        service = StudyAidsService.from_settings()
        quiz    = service.get_quiz("4")
        result  = service.submit_quiz("4", answers)
    """

    def __init__(self, engine: AssessmentEngine, client: Optional[StudyAidsClient] = None) -> None:
        self.engine = engine
        self.client = client
        self.guardrails = GuardrailsPipeline()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "StudyAidsService":
        """Build the catalog, curated bank, engine and (optionally) client from settings."""
        settings = settings or get_settings()
        content = settings.content

        catalog = default_catalog() if content.uses_bundled_catalog else load_catalog(content.catalog_path)
        curated = load_curated_bank(content.curated_bank_path) if content.has_curated_bank else CuratedBank()

        _log_violations(GuardrailsPipeline().check_catalog(catalog, curated))

        engine = AssessmentEngine(
            catalog,
            curated,
            max_per_lesson=settings.engine.max_per_lesson,
            exam_size=settings.engine.exam_size,
        )
        client = (
            StudyAidsClient(settings.remote.base_url, timeout=settings.remote.timeout)
            if settings.remote_enabled else None
        )
        return cls(engine, client)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()

    def __enter__(self) -> "StudyAidsService":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _try_remote(self, operation: str, call: Callable[[StudyAidsClient], T]) -> Optional[T]:
        if self.client is None:
            return None
        try:
            return call(self.client)
        except RemoteUnavailable as exc:
            logger.warning("Remote %s failed; using local engine: %s", operation, exc)
            return None

    # ── content ──────────────────────────────────────────────────────────────

    def get_module(self) -> Optional[StudyModule]:
        module = self._try_remote("get_module", lambda c: c.get_module())
        return module if module is not None else self.engine.catalog.module

    def get_chapters(self) -> list[Lesson]:
        local = list(self.engine.catalog)
        remote = self._try_remote("get_chapters", lambda c: c.get_chapters())
        if remote and len(remote) >= len(local):
            return remote
        return local

    def get_chapter(self, lesson_id: str) -> Lesson:
        lesson = self._try_remote("get_chapter", lambda c: c.get_chapter(lesson_id))
        if lesson is None:
            lesson = self.engine.lesson(lesson_id)
        if lesson is None:
            raise LessonNotFound(f"Chapter {lesson_id!r} not found")
        return lesson

    # ── chapter quizzes ──────────────────────────────────────────────────────

    def get_quiz(self, lesson_id: str) -> list:
        items = self._try_remote("get_quiz", lambda c: c.get_quiz(lesson_id))
        if not items:
            items = self.engine.chapter_quiz(lesson_id)
        _log_violations(self.guardrails.check_questions(items))
        return items

    def submit_quiz(self, lesson_id: str, answers: Sequence[Any]) -> SubmissionSummary:
        summary = self._try_remote("submit_quiz", lambda c: c.submit_quiz(lesson_id, answers))
        if summary is not None:
            return summary
        return self.engine.grade_chapter_quiz(lesson_id, answers)

    # ── final exam ───────────────────────────────────────────────────────────

    def get_final_exam(self, count: Optional[int] = None) -> list:
        n = self.engine.exam_size if count is None else count
        items = self._try_remote("get_final_exam", lambda c: c.get_final_exam())
        items = items[:n] if items else self.engine.final_exam(n)
        _log_violations(self.guardrails.check_exam(items, requested=n))
        return items

    def submit_final_exam(self, answers: Sequence[Any], count: Optional[int] = None) -> SubmissionSummary:
        summary = self._try_remote("submit_final_exam", lambda c: c.submit_final_exam(answers))
        if summary is not None:
            return summary
        return self.engine.grade_final_exam(answers, count)
