"""
guardrails.py – Question-set and content guardrails
===================================================
Checks that wrap the engine's inputs and outputs.  Guards report; they
never raise.  Callers decide what a BLOCK means for them (the service logs
every violation and refuses nothing).

Guardrail levels
----------------
BLOCK   – The artifact is unusable as-is.
WARN    – Usable, but something a content author should look at.
INFO    – Advisory.

Guards implemented
------------------
Question sets (chapter quizzes, exams, curated entries):
  Q-01  At least one question
  Q-02  No duplicate question ids
  Q-03  Choice items have no blank or repeated option text

Exams:
  Q-04  Requested exam size reached

Catalog + curated bank:
  Q-05  Curated bank lessons exist in the catalog
  Q-06  Resource links use https://
  Q-07  Lessons lacking content for synthesis (will be padded)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from study_aids.catalog import Catalog, CuratedBank
from study_aids.models import MIN_OBJECTIVES, MIN_TEACHING_POINTS, NumericItem


# ─── Enums & data models ─────────────────────────────────────────────────────

class GuardrailLevel(str, Enum):
    BLOCK = "BLOCK"
    WARN  = "WARN"
    INFO  = "INFO"


@dataclass
class GuardrailViolation:
    code:    str
    level:   GuardrailLevel
    message: str
    field:   str = ""   # which question / lesson triggered the violation


@dataclass
class GuardrailResult:
    passed:     bool
    violations: list[GuardrailViolation] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return any(v.level == GuardrailLevel.BLOCK for v in self.violations)

    @property
    def warnings(self) -> list[GuardrailViolation]:
        return [v for v in self.violations if v.level == GuardrailLevel.WARN]

    @property
    def infos(self) -> list[GuardrailViolation]:
        return [v for v in self.violations if v.level == GuardrailLevel.INFO]

    def summary(self) -> str:
        if not self.violations:
            return "All guardrails passed."
        return "\n".join(f"{v.level.value} [{v.code}] {v.message}" for v in self.violations)


def _result(violations: list[GuardrailViolation]) -> GuardrailResult:
    return GuardrailResult(
        passed=not any(v.level == GuardrailLevel.BLOCK for v in violations),
        violations=violations,
    )


# ─── Guardrail checks ─────────────────────────────────────────────────────────

class QuestionSetGuardrails:
    """Q-01 – Q-03: structural checks over a list of question items."""

    def check(self, items: Sequence[Any]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []

        # Q-01 Non-empty
        if not items:
            violations.append(GuardrailViolation(
                code="Q-01", level=GuardrailLevel.BLOCK,
                message="Question set is empty.",
            ))

        # Q-02 Unique ids
        seen: set[str] = set()
        for item in items:
            if item.id in seen:
                violations.append(GuardrailViolation(
                    code="Q-02", level=GuardrailLevel.BLOCK,
                    field=item.id,
                    message=f"Duplicate question id '{item.id}'.",
                ))
            seen.add(item.id)

        # Q-03 Option text
        for item in items:
            if isinstance(item, NumericItem):
                continue
            if any(not opt.strip() for opt in item.options):
                violations.append(GuardrailViolation(
                    code="Q-03", level=GuardrailLevel.WARN,
                    field=item.id,
                    message=f"Question '{item.id}' has a blank option.",
                ))
            if len(set(item.options)) != len(item.options):
                violations.append(GuardrailViolation(
                    code="Q-03", level=GuardrailLevel.WARN,
                    field=item.id,
                    message=f"Question '{item.id}' repeats option text.",
                ))

        return _result(violations)


class ExamGuardrails:
    """Q-04: exam size reached."""

    def check(self, items: Sequence[Any], requested: int) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        if len(items) < requested:
            violations.append(GuardrailViolation(
                code="Q-04", level=GuardrailLevel.WARN,
                message=f"Exam has {len(items)} of {requested} requested questions.",
            ))
        return _result(violations)


class CatalogGuardrails:
    """Q-05 – Q-07: catalog and curated bank consistency."""

    def check(self, catalog: Catalog, curated: Optional[CuratedBank] = None) -> GuardrailResult:
        violations: list[GuardrailViolation] = []

        # Q-05 Curated lessons known
        for lesson_id in (curated.lesson_ids() if curated is not None else []):
            if lesson_id not in catalog:
                violations.append(GuardrailViolation(
                    code="Q-05", level=GuardrailLevel.WARN,
                    field=lesson_id,
                    message=f"Curated bank has questions for unknown lesson '{lesson_id}'.",
                ))

        for lesson in catalog:
            # Q-06 Resource links
            for res in lesson.resources:
                if not res.url.startswith("https://"):
                    violations.append(GuardrailViolation(
                        code="Q-06", level=GuardrailLevel.WARN,
                        field=lesson.id,
                        message=f"Resource '{res.label}' in lesson {lesson.id} is not an https:// link.",
                    ))

            # Q-07 Thin content
            if (
                len(lesson.teaching_points) < MIN_TEACHING_POINTS
                and len(lesson.objectives) < MIN_OBJECTIVES
            ):
                violations.append(GuardrailViolation(
                    code="Q-07", level=GuardrailLevel.INFO,
                    field=lesson.id,
                    message=(
                        f"Lesson {lesson.id} has no usable teaching points or objectives; "
                        "its quiz will be padded with tag-presence questions."
                    ),
                ))

        return _result(violations)


# ─── Convenience façade ───────────────────────────────────────────────────────

class GuardrailsPipeline:
    """
    Single entry-point for every guardrail.

    Usage::

        gp = GuardrailsPipeline()
        result = gp.check_catalog(catalog, curated)
        result = gp.check_questions(engine.chapter_quiz("3"))
        result = gp.check_exam(engine.final_exam(35), requested=35)
    """

    def __init__(self):
        self.question_guard = QuestionSetGuardrails()
        self.exam_guard     = ExamGuardrails()
        self.catalog_guard  = CatalogGuardrails()

    def check_questions(self, items: Sequence[Any]) -> GuardrailResult:
        return self.question_guard.check(items)

    def check_exam(self, items: Sequence[Any], requested: int) -> GuardrailResult:
        return self.merge(self.question_guard.check(items), self.exam_guard.check(items, requested))

    def check_catalog(self, catalog: Catalog, curated: Optional[CuratedBank] = None) -> GuardrailResult:
        results = [self.catalog_guard.check(catalog, curated)]
        if curated is not None:
            results.extend(self.question_guard.check(curated.get(lid)) for lid in curated.lesson_ids())
        return self.merge(*results)

    def merge(self, *results: GuardrailResult) -> GuardrailResult:
        """Merge multiple GuardrailResult objects into one."""
        all_v = []
        for r in results:
            all_v.extend(r.violations)
        return _result(all_v)
