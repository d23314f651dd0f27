"""
Tests for the chapter quiz policy (chapter_quiz.py) and the AssessmentEngine
chapter entry points.
"""
from factories import make_lesson, make_single

from study_aids.catalog import Catalog, CuratedBank
from study_aids.chapter_quiz import assemble_chapter_quiz, presence_check_quiz
from study_aids.engine import AssessmentEngine
from study_aids.models import FALSE_INDEX, TRUE_INDEX
from study_aids.synthesizer import synthesize_questions


class TestAssembleChapterQuiz:
    def test_curated_entry_returned_unmodified(self, small_catalog):
        curated_items = [make_single("custom-1", key=0)]
        bank = CuratedBank({"L2": curated_items})
        assert assemble_chapter_quiz("L2", small_catalog, bank) == curated_items

    def test_empty_curated_entry_is_ignored(self, small_catalog):
        bank = CuratedBank({"L2": []})
        items = assemble_chapter_quiz("L2", small_catalog, bank)
        assert items == synthesize_questions(small_catalog.get("L2"), small_catalog)

    def test_synthesized_when_no_bank(self, small_catalog):
        items = assemble_chapter_quiz("L1", small_catalog)
        assert items == synthesize_questions(small_catalog.get("L1"), small_catalog)

    def test_max_per_lesson_respected(self, small_catalog):
        assert len(assemble_chapter_quiz("L1", small_catalog, max_per_lesson=4)) == 4

    def test_unknown_lesson_falls_back(self, small_catalog):
        items = assemble_chapter_quiz("nope", small_catalog)
        assert [i.id for i in items] == [f"nope-q{n}" for n in range(1, 6)]
        assert [i.answer_key for i in items] == [TRUE_INDEX] + [FALSE_INDEX] * 4

    def test_lookup_by_number(self, small_catalog):
        assert assemble_chapter_quiz("2", small_catalog)[0].id == "L2-c-m1"

    def test_fallback_uses_module_title(self, ba_catalog):
        first = assemble_chapter_quiz("99", ba_catalog)[0]
        assert "Study Aids: Business Analytics" in first.prompt


class TestPresenceCheckQuiz:
    def test_five_true_false_items(self):
        items = presence_check_quiz("x")
        assert len(items) == 5
        assert all(i.options == ("True", "False") for i in items)

    def test_only_membership_is_true(self):
        keys = [i.answer_key for i in presence_check_quiz("x")]
        assert keys == [TRUE_INDEX, FALSE_INDEX, FALSE_INDEX, FALSE_INDEX, FALSE_INDEX]

    def test_prompts_name_the_identifier(self):
        items = presence_check_quiz("ch-42", module_title="Statistics")
        assert items[0].prompt == "Chapter ch-42 is part of the Statistics module."
        assert all("ch-42" in i.prompt for i in items)


class TestLookupByNumber:
    def setup_method(self):
        self.catalog = Catalog([make_lesson(n, lesson_id=f"ch-{n}") for n in range(1, 4)])
        self.curated_items = [make_single("curated-1"), make_single("curated-2")]
        self.bank = CuratedBank({"ch-2": self.curated_items})

    def test_number_and_id_select_same_curated_entry(self):
        by_number = assemble_chapter_quiz("2", self.catalog, self.bank)
        by_id = assemble_chapter_quiz("ch-2", self.catalog, self.bank)
        assert [i.id for i in by_number] == ["curated-1", "curated-2"]
        assert by_number == by_id

    def test_number_lookup_synthesizes_without_entry(self):
        assert [i.id for i in assemble_chapter_quiz("3", self.catalog, self.bank)] == ["ch-3-c-m1", "ch-3-c-s1"]

    def test_chapter_quiz_agrees_with_exam(self):
        engine = AssessmentEngine(self.catalog, self.bank)
        exam_ids = {i.id for i in engine.final_exam(6)}
        assert {i.id for i in engine.chapter_quiz("2")} <= exam_ids

    def test_grading_by_number_uses_curated_entry(self):
        engine = AssessmentEngine(self.catalog, self.bank)
        summary = engine.grade_chapter_quiz("2", [1, 1])
        assert [r.id for r in summary.results] == ["curated-1", "curated-2"]
        assert summary.score == 2


class TestEngineChapterQuiz:
    def test_never_empty(self, engine):
        for lesson_id in ["1", "19", "missing", ""]:
            assert engine.chapter_quiz(lesson_id)

    def test_curated_preferred(self, curated_engine):
        assert [i.id for i in curated_engine.chapter_quiz("1")] == ["q1-1"]
        assert curated_engine.chapter_quiz("4")[0].id == "4-c-m1"

    def test_grade_chapter_quiz_all_correct(self, engine):
        items = engine.chapter_quiz("6")
        answers = [
            list(i.answer_key) if i.kind == "multi-choice" else i.answer_key
            for i in items
        ]
        summary = engine.grade_chapter_quiz("6", answers)
        assert summary.score == summary.total == 2

    def test_grade_unknown_lesson(self, engine):
        summary = engine.grade_chapter_quiz("missing", [0, 1, 1, 1, 1])
        assert summary.total == 5
        assert summary.score == 5

    def test_single_lesson_catalog(self):
        catalog = Catalog([make_lesson(1)])
        assert len(assemble_chapter_quiz("L1", catalog)) == 2
