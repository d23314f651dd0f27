"""
Data models for the study-aids assessment engine.

Lesson content is validated with Pydantic because it arrives from outside
(JSON files, the REST backend).  Question items form a tagged union on
``kind`` so every consumer can match on the three answer shapes instead of
probing loosely-typed fields.  Grading output is plain dataclasses.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator


# ─── Content thresholds ──────────────────────────────────────────────────────
# These gate which synthesis paths are allowed to emit an item.

MIN_TEACHING_POINTS:  int = 2   # multi-choice needs at least two correct statements
MAX_CORRECT_POINTS:   int = 3   # only the first three teaching points are used
MIN_OBJECTIVES:       int = 1
MIN_MULTI_OPTIONS:    int = 3
MAX_MULTI_OPTIONS:    int = 6
MIN_MULTI_ANSWERS:    int = 2
MIN_DISTRACTORS:      int = 1   # every choice item keeps at least one wrong option
TITLE_DISTRACTORS:    int = 3
OBJECTIVE_DISTRACTORS: int = 3

DEFAULT_MAX_PER_LESSON: int = 2
DEFAULT_EXAM_SIZE:      int = 35

TRUE_FALSE: tuple[str, str] = ("True", "False")
TRUE_INDEX:  int = 0
FALSE_INDEX: int = 1


# ─── Content catalog records ─────────────────────────────────────────────────

class Resource(BaseModel):
    """A labelled link attached to a lesson."""
    model_config = ConfigDict(frozen=True)

    label: str
    url:   str


class Application(BaseModel):
    """Applied context for a lesson, e.g. how it maps onto casework."""
    model_config = ConfigDict(frozen=True)

    context: str
    items:   tuple[str, ...] = ()


class Lesson(BaseModel):
    """
    One chapter of study content.

    ``number`` is only used for display and seed derivation; lessons are
    never indexed by it.  Accepts both snake_case and the camelCase keys
    used by the REST backend.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id:              str
    number:          int = Field(gt=0)
    title:           str = ""
    objectives:      tuple[str, ...] = ()
    summary:         str = ""
    resources:       tuple[Resource, ...] = ()
    tags:            tuple[str, ...] = ()
    teaching_points: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("teaching_points", "teachingPoints")
    )
    key_takeaways:   tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("key_takeaways", "keyTakeaways")
    )
    applications:    tuple[Application, ...] = ()


class StudyModule(BaseModel):
    """Header record describing the module a catalog belongs to."""
    model_config = ConfigDict(frozen=True)

    id:          str
    title:       str
    description: str = ""
    sections:    tuple[str, ...] = ()


# ─── Question items (tagged union on ``kind``) ───────────────────────────────

class SingleChoiceItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind:        Literal["single-choice"] = "single-choice"
    id:          str
    prompt:      str
    options:     tuple[str, ...]
    answer_key:  int
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def _answer_in_bounds(self) -> "SingleChoiceItem":
        if not 0 <= self.answer_key < len(self.options):
            raise ValueError(
                f"answer_key {self.answer_key} outside options [0, {len(self.options)})"
            )
        return self


class MultiChoiceItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind:        Literal["multi-choice"] = "multi-choice"
    id:          str
    prompt:      str
    options:     tuple[str, ...]
    answer_key:  tuple[int, ...]
    explanation: Optional[str] = None

    @model_validator(mode="after")
    def _valid_selection(self) -> "MultiChoiceItem":
        n = len(self.options)
        if n < MIN_MULTI_OPTIONS:
            raise ValueError(f"multi-choice needs at least {MIN_MULTI_OPTIONS} options, got {n}")
        if len(set(self.answer_key)) != len(self.answer_key):
            raise ValueError("answer_key contains duplicate indices")
        if not MIN_MULTI_ANSWERS <= len(self.answer_key) < n:
            raise ValueError(
                f"multi-choice needs between {MIN_MULTI_ANSWERS} and {n - 1} correct indices"
            )
        if any(not 0 <= i < n for i in self.answer_key):
            raise ValueError(f"answer_key {self.answer_key} outside options [0, {n})")
        return self


class NumericItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind:        Literal["numeric"] = "numeric"
    id:          str
    prompt:      str
    answer_key:  float
    explanation: Optional[str] = None


QuestionItem = Annotated[
    Union[SingleChoiceItem, MultiChoiceItem, NumericItem],
    Field(discriminator="kind"),
]

_QUESTION_ITEM_ADAPTER: TypeAdapter = TypeAdapter(QuestionItem)
_QUESTION_LIST_ADAPTER: TypeAdapter = TypeAdapter(list[QuestionItem])

# Kind names used by the REST backend
_LEGACY_KINDS: dict[str, str] = {
    "mcq":     "single-choice",
    "msq":     "multi-choice",
    "numeric": "numeric",
}


def _normalise_item_payload(data: dict[str, Any]) -> dict[str, Any]:
    payload = dict(data)
    if "kind" not in payload and "type" in payload:
        legacy = payload.pop("type")
        payload["kind"] = _LEGACY_KINDS.get(legacy, legacy)
    if "answer_key" not in payload and "answerKey" in payload:
        payload["answer_key"] = payload.pop("answerKey")
    return payload


def parse_question_item(data: dict[str, Any]) -> Union[SingleChoiceItem, MultiChoiceItem, NumericItem]:
    """Validate one question payload (snake_case or backend camelCase)."""
    return _QUESTION_ITEM_ADAPTER.validate_python(_normalise_item_payload(data))


def parse_question_items(data: list[dict[str, Any]]) -> list:
    """Validate a list of question payloads; raises ``pydantic.ValidationError``."""
    return _QUESTION_LIST_ADAPTER.validate_python([_normalise_item_payload(d) for d in data])


# ─── Grading output ──────────────────────────────────────────────────────────

# A per-question answer: option index, list of indices, number, or unanswered
SubmittedAnswer = Union[int, float, list[int], None]


@dataclass(frozen=True)
class GradeResult:
    """Per-question grading outcome."""
    id:          str
    correct:     bool
    explanation: Optional[str] = None


@dataclass(frozen=True)
class SubmissionSummary:
    """Scored submission: ``score`` correct out of ``total``."""
    total:   int
    score:   int
    results: list[GradeResult] = field(default_factory=list)

    @property
    def score_pct(self) -> float:
        return (self.score / self.total) * 100 if self.total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
