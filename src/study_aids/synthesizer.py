"""
synthesizer.py — Content-derived question synthesis
===================================================
Manufactures quiz items for one lesson from its own metadata, using sibling
lessons as the source of distractors.  No question bank, network or storage
is involved; the output is a pure function of (lesson, catalog, limits).

Synthesis paths, tried in order until ``max_per_lesson`` items exist:

  1. Title identification   single-choice   lesson title vs three sibling titles
  2. Teaching-point select  multi-choice    up to 3 own points vs sibling points
  3. Objective matching     single-choice   first objective vs sibling objectives
  4. Tag presence padding   single-choice   True/False, cannot fail

Each choice path needs at least one sibling distractor; a lesson with no
usable siblings falls through to padding.

Every shuffle is seeded from ``len(catalog) + lesson.number + seed_offset``
so the same catalog revision always yields the same quiz.
"""

from __future__ import annotations

import logging
from typing import Optional

from study_aids.catalog import Catalog
from study_aids.models import (
    DEFAULT_MAX_PER_LESSON,
    FALSE_INDEX,
    MAX_CORRECT_POINTS,
    MAX_MULTI_OPTIONS,
    MIN_DISTRACTORS,
    MIN_MULTI_ANSWERS,
    MIN_MULTI_OPTIONS,
    MIN_OBJECTIVES,
    MIN_TEACHING_POINTS,
    OBJECTIVE_DISTRACTORS,
    TITLE_DISTRACTORS,
    TRUE_FALSE,
    TRUE_INDEX,
    Lesson,
    MultiChoiceItem,
    SingleChoiceItem,
)
from study_aids.shuffle import deterministic_shuffle

logger = logging.getLogger(__name__)

# Offsets added to the local seed for each shuffle
_SEED_TITLE_DISTRACTORS     = 0
_SEED_TITLE_OPTIONS         = 13
_SEED_POINT_DISTRACTORS     = 29
_SEED_POINT_OPTIONS         = 31
_SEED_OBJECTIVE_DISTRACTORS = 41
_SEED_OBJECTIVE_OPTIONS     = 43


def local_seed(lesson: Lesson, catalog: Catalog, seed_offset: int = 0) -> int:
    return len(catalog) + lesson.number + seed_offset


# ─── Synthesis paths ─────────────────────────────────────────────────────────

def _title_item(lesson: Lesson, siblings: list[Lesson], seed: int) -> Optional[SingleChoiceItem]:
    if not lesson.title:
        return None
    candidates = [s.title for s in siblings if s.title and s.title != lesson.title]
    distractors = deterministic_shuffle(candidates, seed + _SEED_TITLE_DISTRACTORS)[:TITLE_DISTRACTORS]
    if len(distractors) < MIN_DISTRACTORS:
        return None
    options = deterministic_shuffle([lesson.title, *distractors], seed + _SEED_TITLE_OPTIONS)
    return SingleChoiceItem(
        id=f"{lesson.id}-c-m1",
        prompt=f"Which title best matches the main focus of Chapter {lesson.number}?",
        options=options,
        answer_key=options.index(lesson.title),
        explanation=f'Chapter {lesson.number} is "{lesson.title}".',
    )


def _teaching_point_item(lesson: Lesson, siblings: list[Lesson], seed: int) -> Optional[MultiChoiceItem]:
    correct = list(lesson.teaching_points[:MAX_CORRECT_POINTS])
    if len(correct) < MIN_TEACHING_POINTS:
        return None

    # one point per sibling; texts shared with this lesson are not distractors
    pool = [
        s.teaching_points[0] for s in siblings
        if s.teaching_points and s.teaching_points[0] not in correct
    ]
    distractors = deterministic_shuffle(pool, seed + _SEED_POINT_DISTRACTORS)
    distractors = distractors[:max(0, MAX_MULTI_OPTIONS - len(correct))]
    options = deterministic_shuffle([*correct, *distractors], seed + _SEED_POINT_OPTIONS)
    answer_key = tuple(i for i, opt in enumerate(options) if opt in correct)

    if (
        len(options) < MIN_MULTI_OPTIONS
        or len(answer_key) < MIN_MULTI_ANSWERS
        or len(distractors) < MIN_DISTRACTORS
    ):
        return None
    return MultiChoiceItem(
        id=f"{lesson.id}-c-s1",
        prompt=f"Select all statements that align with Chapter {lesson.number} teaching points:",
        options=options,
        answer_key=answer_key,
        explanation="Correct choices are derived from this chapter's teaching points.",
    )


def _objective_item(lesson: Lesson, siblings: list[Lesson], seed: int) -> Optional[SingleChoiceItem]:
    if len(lesson.objectives) < MIN_OBJECTIVES:
        return None
    objective = lesson.objectives[0]
    pool = [s.objectives[0] for s in siblings if s.objectives and s.objectives[0] != objective]
    distractors = deterministic_shuffle(pool, seed + _SEED_OBJECTIVE_DISTRACTORS)[:OBJECTIVE_DISTRACTORS]
    if len(distractors) < MIN_DISTRACTORS:
        return None
    options = deterministic_shuffle([objective, *distractors], seed + _SEED_OBJECTIVE_OPTIONS)
    return SingleChoiceItem(
        id=f"{lesson.id}-c-m2",
        prompt=f"Which objective best aligns with Chapter {lesson.number}?",
        options=options,
        answer_key=options.index(objective),
        explanation="Derived from the first listed objective for this chapter.",
    )


def _tag_presence_item(lesson: Lesson, position: int) -> SingleChoiceItem:
    return SingleChoiceItem(
        id=f"{lesson.id}-c-tf{position}",
        prompt=f"Chapter {lesson.number} has at least one tag.",
        options=TRUE_FALSE,
        answer_key=TRUE_INDEX if lesson.tags else FALSE_INDEX,
        explanation="Checks the presence of tags in chapter metadata.",
    )


# ─── Public entry point ──────────────────────────────────────────────────────

def synthesize_questions(
    lesson: Lesson,
    catalog: Catalog,
    max_per_lesson: int = DEFAULT_MAX_PER_LESSON,
    seed_offset: int = 0,
) -> list:
    """
    Return exactly ``max_per_lesson`` question items for *lesson*.

    Parameters
    ----------
    lesson         : Lesson   — the lesson being quizzed
    catalog        : Catalog  — full catalog; siblings supply distractors
    max_per_lesson : int      — number of items to return
    seed_offset    : int      — decorrelates repeated passes over one lesson
    """
    seed = local_seed(lesson, catalog, seed_offset)
    siblings = catalog.siblings(lesson)
    items: list = []

    for build in (_title_item, _teaching_point_item):
        if len(items) >= max_per_lesson:
            break
        item = build(lesson, siblings, seed)
        if item is not None:
            items.append(item)

    if len(items) < max_per_lesson:
        item = _objective_item(lesson, siblings, seed)
        if item is not None:
            items.append(item)

    if len(items) < max_per_lesson:
        logger.debug(
            "Lesson %s: padding %d tag-presence item(s)", lesson.id, max_per_lesson - len(items)
        )
    while len(items) < max_per_lesson:
        items.append(_tag_presence_item(lesson, len(items) + 1))

    return items[:max_per_lesson]
