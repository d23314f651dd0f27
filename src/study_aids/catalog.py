"""
catalog.py — Content Catalog and Curated Bank
=============================================
Read-only snapshots of the two inputs the engine consumes.

Both are built explicitly by the caller (from JSON files, the REST backend,
or the bundled Business Analytics seed) and passed into the engine; nothing
here is held in module-level state.

Public API
----------
  Catalog                  ordered, id-unique lesson collection
  CuratedBank              lesson id → pre-authored question items
  load_catalog(path)       Catalog from a JSON file
  load_curated_bank(path)  CuratedBank from a JSON file
  default_catalog()        bundled 19-chapter Business Analytics catalog
  sample_curated_bank()    bundled sample bank for chapters 1–3
"""

from __future__ import annotations

import json
import logging
from importlib.resources import files
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional, Union

from pydantic import ValidationError

from study_aids.models import Lesson, StudyModule, parse_question_items

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_FILE = "business_analytics.json"
SAMPLE_BANK_FILE     = "curated_bank.json"


class CatalogError(ValueError):
    """Raised when a catalog or curated bank file cannot be read or validated."""


class Catalog:
    """
    Ordered collection of lessons, unique by id.

    Catalog order is the order lessons were supplied in; it drives exam
    allocation and is never re-sorted here.
    """

    def __init__(self, lessons: Iterable[Lesson], module: Optional[StudyModule] = None) -> None:
        self._lessons: tuple[Lesson, ...] = tuple(lessons)
        self._by_id: dict[str, Lesson] = {}
        for lesson in self._lessons:
            if lesson.id in self._by_id:
                raise ValueError(f"Duplicate lesson id {lesson.id!r} in catalog")
            self._by_id[lesson.id] = lesson
        self.module = module

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        module: Optional[Mapping[str, Any]] = None,
    ) -> "Catalog":
        lessons = [Lesson.model_validate(dict(r)) for r in records]
        return cls(lessons, StudyModule.model_validate(dict(module)) if module else None)

    @property
    def lessons(self) -> tuple[Lesson, ...]:
        return self._lessons

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._by_id

    def get(self, lesson_id: str) -> Optional[Lesson]:
        """Look a lesson up by id, falling back to its ordinal number."""
        lesson = self._by_id.get(lesson_id)
        if lesson is None and str(lesson_id).isdigit():
            number = int(lesson_id)
            lesson = next((l for l in self._lessons if l.number == number), None)
        return lesson

    def siblings(self, lesson: Lesson) -> list[Lesson]:
        """Every other lesson, in catalog order."""
        return [l for l in self._lessons if l.id != lesson.id]


class CuratedBank:
    """Externally authored questions keyed by lesson id; absent ids read as empty."""

    def __init__(self, entries: Optional[Mapping[str, Iterable[Any]]] = None) -> None:
        self._entries: dict[str, tuple] = {
            lesson_id: tuple(items) for lesson_id, items in (entries or {}).items()
        }

    @classmethod
    def from_records(cls, raw: Mapping[str, list[Mapping[str, Any]]]) -> "CuratedBank":
        return cls({
            lesson_id: parse_question_items([dict(item) for item in items])
            for lesson_id, items in raw.items()
        })

    def get(self, lesson_id: str) -> tuple:
        return self._entries.get(lesson_id, ())

    def __contains__(self, lesson_id: object) -> bool:
        return bool(self._entries.get(lesson_id))  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._entries)

    def lesson_ids(self) -> list[str]:
        return list(self._entries)


# ─── Loaders ─────────────────────────────────────────────────────────────────

def _read_json(source: Union[str, Path]) -> Any:
    try:
        return json.loads(Path(source).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"Cannot read {source}: {exc}") from exc


def _read_bundled(name: str) -> Any:
    return json.loads((files("study_aids") / "data" / name).read_text(encoding="utf-8"))


def catalog_from_payload(payload: Any) -> Catalog:
    """
    Build a Catalog from decoded JSON.

    Accepts either a bare list of lesson records or an object with
    ``lessons`` and an optional ``module`` header.
    """
    if isinstance(payload, list):
        records, module = payload, None
    elif isinstance(payload, dict) and isinstance(payload.get("lessons"), list):
        records, module = payload["lessons"], payload.get("module")
    else:
        raise CatalogError("Catalog JSON must be a list of lessons or an object with 'lessons'")
    try:
        return Catalog.from_records(records, module)
    except ValidationError as exc:
        raise CatalogError(f"Invalid lesson record: {exc}") from exc
    except ValueError as exc:
        raise CatalogError(str(exc)) from exc


def curated_bank_from_payload(payload: Any) -> CuratedBank:
    if not isinstance(payload, dict):
        raise CatalogError("Curated bank JSON must map lesson ids to question lists")
    try:
        return CuratedBank.from_records(payload)
    except ValidationError as exc:
        raise CatalogError(f"Invalid curated question: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed curated bank entry: {exc}") from exc


def load_catalog(path: Union[str, Path]) -> Catalog:
    catalog = catalog_from_payload(_read_json(path))
    logger.debug("Loaded %d lessons from %s", len(catalog), path)
    return catalog


def load_curated_bank(path: Union[str, Path]) -> CuratedBank:
    bank = curated_bank_from_payload(_read_json(path))
    logger.debug("Loaded curated questions for %d lessons from %s", len(bank), path)
    return bank


def default_catalog() -> Catalog:
    """The bundled Business Analytics catalog (19 chapters)."""
    return catalog_from_payload(_read_bundled(DEFAULT_CATALOG_FILE))


def sample_curated_bank() -> CuratedBank:
    return curated_bank_from_payload(_read_bundled(SAMPLE_BANK_FILE))
