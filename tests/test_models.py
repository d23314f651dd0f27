"""
Tests for data models: Lesson, question item union, payload parsing.
"""
import pytest
from pydantic import ValidationError
from factories import make_lesson

from study_aids.models import (
    Lesson,
    MultiChoiceItem,
    NumericItem,
    SingleChoiceItem,
    parse_question_item,
    parse_question_items,
)


# ─── Lesson ───────────────────────────────────────────────────────────────────

class TestLesson:
    def test_lists_become_tuples(self):
        lesson = make_lesson(1)
        assert isinstance(lesson.teaching_points, tuple)
        assert lesson.tags == ("tag-1",)

    def test_camel_case_keys_accepted(self):
        lesson = Lesson.model_validate({
            "id": "7", "number": 7, "title": "Decisions",
            "teachingPoints": ["a", "b"], "keyTakeaways": ["k"],
        })
        assert lesson.teaching_points == ("a", "b")
        assert lesson.key_takeaways == ("k",)

    def test_defaults(self):
        lesson = Lesson(id="1", number=1)
        assert lesson.title == ""
        assert lesson.objectives == ()
        assert lesson.resources == ()

    @pytest.mark.parametrize("number", [0, -1])
    def test_number_must_be_positive(self, number):
        with pytest.raises(ValidationError):
            Lesson(id="x", number=number)

    def test_frozen(self):
        lesson = make_lesson(1)
        with pytest.raises(ValidationError):
            lesson.title = "changed"

    def test_nested_records(self):
        lesson = Lesson.model_validate({
            "id": "1", "number": 1,
            "resources": [{"label": "TOC", "url": "https://example.org"}],
            "applications": [{"context": "Casework", "items": ["one", "two"]}],
        })
        assert lesson.resources[0].label == "TOC"
        assert lesson.applications[0].items == ("one", "two")


# ─── Question items ───────────────────────────────────────────────────────────

class TestSingleChoiceItem:
    def test_kind_default(self):
        item = SingleChoiceItem(id="a", prompt="p", options=["x", "y"], answer_key=1)
        assert item.kind == "single-choice"
        assert item.explanation is None

    @pytest.mark.parametrize("key", [-1, 2, 5])
    def test_answer_out_of_bounds(self, key):
        with pytest.raises(ValidationError):
            SingleChoiceItem(id="a", prompt="p", options=["x", "y"], answer_key=key)


class TestMultiChoiceItem:
    def test_valid(self):
        item = MultiChoiceItem(id="m", prompt="p", options=["a", "b", "c"], answer_key=[0, 2])
        assert item.answer_key == (0, 2)

    @pytest.mark.parametrize("options,key", [
        (["a", "b"], [0, 1]),               # too few options
        (["a", "b", "c"], [0]),             # too few answers
        (["a", "b", "c"], [0, 1, 2]),       # no wrong option left
        (["a", "b", "c", "d"], [0, 0]),     # duplicate index
        (["a", "b", "c", "d"], [0, 4]),     # out of bounds
    ])
    def test_invalid_shapes(self, options, key):
        with pytest.raises(ValidationError):
            MultiChoiceItem(id="m", prompt="p", options=options, answer_key=key)


class TestNumericItem:
    def test_has_no_options(self):
        item = NumericItem(id="n", prompt="p", answer_key=5)
        assert not hasattr(item, "options")
        assert item.answer_key == 5


class TestParsing:
    def test_discriminates_on_kind(self):
        items = parse_question_items([
            {"id": "a", "kind": "single-choice", "prompt": "p", "options": ["x", "y"], "answer_key": 0},
            {"id": "b", "kind": "multi-choice", "prompt": "p", "options": ["x", "y", "z"], "answer_key": [0, 1]},
            {"id": "c", "kind": "numeric", "prompt": "p", "answer_key": 3.5},
        ])
        assert [type(i) for i in items] == [SingleChoiceItem, MultiChoiceItem, NumericItem]

    @pytest.mark.parametrize("legacy,expected", [
        ("mcq", SingleChoiceItem),
        ("msq", MultiChoiceItem),
    ])
    def test_backend_payload(self, legacy, expected):
        key = 1 if legacy == "mcq" else [0, 1]
        item = parse_question_item({
            "id": "q", "type": legacy, "prompt": "p",
            "options": ["x", "y", "z"], "answerKey": key,
        })
        assert isinstance(item, expected)

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            parse_question_item({"id": "q", "type": "short", "prompt": "p", "answerKey": 1})

    def test_missing_kind_rejected(self):
        with pytest.raises(ValidationError):
            parse_question_item({"id": "q", "prompt": "p", "answer_key": 1})
