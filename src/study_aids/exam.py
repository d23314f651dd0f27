"""
exam.py — Final Exam Assembler
==============================
Builds a fixed-size exam spanning every lesson in the catalog.

Allocation
----------
  base      = max(1, N // lessons)
  remainder = max(0, N - base * lessons)
  target[i] = base + 1 for the first ``remainder`` lessons, else base

The first lessons in catalog order take the extra items; remainder slots are
never distributed at random.  Each lesson's pool is its curated items plus,
when those fall short of the target, synthesized ones.  Pools are shuffled
with ``lessons + idx`` and the first ``target[i]`` items taken.  If that
still leaves the exam short, unused items from every pool (each reshuffled
with ``lessons * 7 + idx``) fill the gap.  The result never exceeds N.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from study_aids.catalog import Catalog, CuratedBank
from study_aids.models import DEFAULT_EXAM_SIZE
from study_aids.shuffle import deterministic_shuffle
from study_aids.synthesizer import synthesize_questions

logger = logging.getLogger(__name__)

_LEFTOVER_SEED_FACTOR = 7


def lesson_targets(total_count: int, lesson_count: int) -> list[int]:
    """Per-lesson item counts, extra items going to the earliest lessons."""
    if lesson_count <= 0:
        return []
    base = max(1, total_count // lesson_count)
    remainder = max(0, total_count - base * lesson_count)
    return [base + (1 if idx < remainder else 0) for idx in range(lesson_count)]


def fill_from_pools(pools: Sequence[list], targets: Sequence[int], total_count: int) -> list:
    """
    Take ``targets[i]`` items from each shuffled pool, then top up from leftovers.

    ``pools`` and ``targets`` are parallel and in catalog order.
    """
    lesson_count = len(pools)
    result: list = []
    shuffled_pools: list[list] = []
    for idx, pool in enumerate(pools):
        shuffled = deterministic_shuffle(pool, lesson_count + idx)
        result.extend(shuffled[:targets[idx]])
        shuffled_pools.append(shuffled)

    if len(result) < total_count:
        leftovers: list = []
        for idx, shuffled in enumerate(shuffled_pools):
            unused = shuffled[targets[idx]:]
            leftovers.extend(deterministic_shuffle(unused, lesson_count * _LEFTOVER_SEED_FACTOR + idx))
        logger.debug(
            "Exam short by %d item(s); %d leftover(s) available",
            total_count - len(result), len(leftovers),
        )
        result.extend(leftovers[:total_count - len(result)])

    return result[:total_count]


def assemble_exam(
    catalog: Catalog,
    curated: Optional[CuratedBank] = None,
    total_count: int = DEFAULT_EXAM_SIZE,
) -> list:
    """Return ``min(total_count, achievable)`` items balanced across lessons."""
    if total_count <= 0 or len(catalog) == 0:
        return []

    targets = lesson_targets(total_count, len(catalog))
    pools: list[list] = []
    for lesson, target in zip(catalog, targets):
        bank = list(curated.get(lesson.id)) if curated is not None else []
        synthesized = [] if len(bank) >= target else synthesize_questions(lesson, catalog, target)
        pools.append(bank + synthesized)

    logger.debug(
        "Assembling %d-item exam over %d lessons (targets %s)",
        total_count, len(catalog), targets,
    )
    return fill_from_pools(pools, targets, total_count)
