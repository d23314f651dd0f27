"""
Smoke tests for guardrails pipeline.
Run: python -m pytest tests/ -v
"""
from factories import (
    make_bare_lesson,
    make_catalog,
    make_lesson,
    make_numeric,
    make_resource,
    make_single,
)

from study_aids.catalog import Catalog, CuratedBank
from study_aids.guardrails import (
    CatalogGuardrails,
    ExamGuardrails,
    GuardrailLevel,
    GuardrailsPipeline,
    QuestionSetGuardrails,
)
from study_aids.models import SingleChoiceItem


def _codes(result):
    return [v.code for v in result.violations]


class TestQ01Q03QuestionSets:
    def setup_method(self):
        self.guard = QuestionSetGuardrails()

    def test_empty_set_blocks(self):
        result = self.guard.check([])
        assert result.blocked
        assert not result.passed
        assert _codes(result) == ["Q-01"]

    def test_duplicate_ids_block(self):
        result = self.guard.check([make_single("a"), make_single("a")])
        assert result.blocked
        dup = [v for v in result.violations if v.code == "Q-02"]
        assert dup and dup[0].field == "a"

    def test_blank_option_warns(self):
        item = SingleChoiceItem(id="x", prompt="p", options=["ok", "  "], answer_key=0)
        result = self.guard.check([item])
        assert result.passed
        assert [v.code for v in result.warnings] == ["Q-03"]

    def test_repeated_option_warns(self):
        item = SingleChoiceItem(id="x", prompt="p", options=["same", "same"], answer_key=0)
        assert _codes(self.guard.check([item])) == ["Q-03"]

    def test_numeric_items_skip_option_checks(self):
        assert self.guard.check([make_numeric()]).violations == []

    def test_synthesized_quiz_is_clean(self, engine):
        assert engine.chapter_quiz("4") and self.guard.check(engine.chapter_quiz("4")).violations == []


class TestQ04Exam:
    def test_shortfall_warns(self):
        result = ExamGuardrails().check([make_single()], requested=3)
        assert result.passed
        assert result.warnings[0].code == "Q-04"

    def test_full_exam_passes(self, engine):
        result = GuardrailsPipeline().check_exam(engine.final_exam(35), requested=35)
        assert result.violations == []
        assert result.summary() == "All guardrails passed."


class TestQ05Q07Catalog:
    def setup_method(self):
        self.guard = CatalogGuardrails()

    def test_unknown_curated_lesson_warns(self, small_catalog):
        bank = CuratedBank({"L9": [make_single()]})
        result = self.guard.check(small_catalog, bank)
        assert [v.field for v in result.violations if v.code == "Q-05"] == ["L9"]

    def test_http_resource_warns(self):
        catalog = Catalog([
            make_lesson(1, resources=[make_resource("http://insecure.example.org")]),
            make_lesson(2, resources=[make_resource()]),
        ])
        result = self.guard.check(catalog)
        assert _codes(result) == ["Q-06"]
        assert result.warnings[0].field == "L1"

    def test_thin_lesson_is_info(self):
        catalog = Catalog([make_lesson(1), make_bare_lesson(2)])
        result = self.guard.check(catalog)
        assert [v.level for v in result.violations] == [GuardrailLevel.INFO]
        assert result.infos[0].field == "L2"

    def test_bundled_content_is_clean(self, ba_catalog, sample_bank):
        assert GuardrailsPipeline().check_catalog(ba_catalog, sample_bank).violations == []


class TestPipeline:
    def test_check_catalog_includes_curated_entries(self):
        bank = CuratedBank({"L1": [make_single("a"), make_single("a")]})
        result = GuardrailsPipeline().check_catalog(make_catalog(2), bank)
        assert "Q-02" in _codes(result)
        assert result.blocked

    def test_merge_combines_violations(self):
        gp = GuardrailsPipeline()
        merged = gp.merge(gp.check_questions([]), ExamGuardrails().check([], requested=2))
        assert _codes(merged) == ["Q-01", "Q-04"]
        assert not merged.passed

    def test_summary_lists_each_violation(self):
        text = GuardrailsPipeline().check_questions([]).summary()
        assert text == "BLOCK [Q-01] Question set is empty."
