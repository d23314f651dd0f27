"""
grading.py — Grading Engine
===========================
Scores submitted answers against question items.

  single-choice  correct iff the answer is an integer equal to the key
  multi-choice   correct iff the answer is a list whose sorted contents
                 equal the sorted key (order independent)
  numeric        correct iff the answer is a number exactly equal to the key

Missing answers, ``None`` and mismatched shapes grade as incorrect; nothing
here raises on malformed input.
"""

from __future__ import annotations

from numbers import Real
from typing import Any, Sequence

from study_aids.models import (
    GradeResult,
    MultiChoiceItem,
    NumericItem,
    SingleChoiceItem,
    SubmissionSummary,
    SubmittedAnswer,
)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_index(value: Any) -> bool:
    return _is_number(value) and float(value).is_integer()


def is_correct(item: Any, answer: SubmittedAnswer) -> bool:
    """Compare one answer with one item's key."""
    if isinstance(item, SingleChoiceItem):
        return _is_index(answer) and answer == item.answer_key
    if isinstance(item, MultiChoiceItem):
        if not isinstance(answer, (list, tuple)) or not all(_is_index(a) for a in answer):
            return False
        return sorted(answer) == sorted(item.answer_key)
    if isinstance(item, NumericItem):
        return _is_number(answer) and answer == item.answer_key
    return False


def grade_submission(items: Sequence[Any], answers: Sequence[SubmittedAnswer]) -> SubmissionSummary:
    """
    Grade *answers* against *items* by position.

    *answers* may be shorter than *items*; missing positions are unanswered.
    """
    results: list[GradeResult] = []
    for i, item in enumerate(items):
        answer = answers[i] if i < len(answers) else None
        results.append(GradeResult(
            id=item.id,
            correct=is_correct(item, answer),
            explanation=item.explanation,
        ))
    score = sum(1 for r in results if r.correct)
    return SubmissionSummary(total=len(items), score=score, results=results)
