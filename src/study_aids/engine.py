"""
engine.py — Assessment Engine
=============================
Binds one catalog snapshot and one curated-bank snapshot to the quiz, exam
and grading entry points.

Every method is a pure function of the bound snapshots and its arguments:
no I/O, no shared mutable state, no randomness beyond the fixed seeds.  Two
engines built from equal inputs return equal results, so callers can run
them concurrently without locking.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from study_aids.catalog import Catalog, CuratedBank
from study_aids.chapter_quiz import assemble_chapter_quiz
from study_aids.exam import assemble_exam
from study_aids.grading import grade_submission
from study_aids.models import (
    DEFAULT_EXAM_SIZE,
    DEFAULT_MAX_PER_LESSON,
    Lesson,
    SubmissionSummary,
)


class AssessmentEngine:
    """
    Deterministic quiz / exam generation and grading over a lesson catalog.

    Usage::

        engine  = AssessmentEngine(default_catalog(), CuratedBank())
        quiz    = engine.chapter_quiz("7")
        summary = engine.grade_chapter_quiz("7", answers)
        exam    = engine.final_exam(35)
    """

    def __init__(
        self,
        catalog: Catalog,
        curated: Optional[CuratedBank] = None,
        *,
        max_per_lesson: int = DEFAULT_MAX_PER_LESSON,
        exam_size: int = DEFAULT_EXAM_SIZE,
    ) -> None:
        self.catalog = catalog
        self.curated = curated if curated is not None else CuratedBank()
        self.max_per_lesson = max_per_lesson
        self.exam_size = exam_size

    def lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self.catalog.get(lesson_id)

    def chapter_quiz(self, lesson_id: str) -> list:
        return assemble_chapter_quiz(lesson_id, self.catalog, self.curated, self.max_per_lesson)

    def final_exam(self, total_count: Optional[int] = None) -> list:
        count = self.exam_size if total_count is None else total_count
        return assemble_exam(self.catalog, self.curated, count)

    def grade(self, items: Sequence[Any], answers: Sequence[Any]) -> SubmissionSummary:
        return grade_submission(items, answers)

    def grade_chapter_quiz(self, lesson_id: str, answers: Sequence[Any]) -> SubmissionSummary:
        """Regenerate the chapter quiz and grade *answers* against it."""
        return grade_submission(self.chapter_quiz(lesson_id), answers)

    def grade_final_exam(
        self, answers: Sequence[Any], total_count: Optional[int] = None
    ) -> SubmissionSummary:
        return grade_submission(self.final_exam(total_count), answers)
