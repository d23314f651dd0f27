"""
study_aids — Deterministic content-derived assessment engine
============================================================
Turns structured lesson metadata into chapter quizzes and a balanced final
exam, and grades submissions, with every shuffle seeded for reproducibility.

Module map
----------
  models.py        Lesson / question item models and content thresholds.
  shuffle.py       Seeded LCG + Fisher–Yates shuffle.
  catalog.py       Catalog and CuratedBank snapshots; JSON loaders.
  synthesizer.py   Questions from one lesson's fields + sibling distractors.
  chapter_quiz.py  Curated → synthesized → presence-check quiz policy.
  exam.py          Balanced multi-chapter exam assembly.
  grading.py       Single-choice / multi-choice / numeric grading.
  engine.py        AssessmentEngine façade over the above.
  guardrails.py    Question-set and catalog checks.
  config.py        Settings loaded from .env.
  remote.py        httpx client for the study-aids REST backend.
  service.py       Remote-first service with local-engine fallback.
  cli.py           ``study-aids`` console script (rich output).

Data flow
---------
  Catalog → synthesizer → chapter_quiz ─┬─→ single-chapter quiz
                                        └─→ exam → final exam
  answers + quiz/exam → grading → SubmissionSummary
"""
__version__ = "0.1.0"
