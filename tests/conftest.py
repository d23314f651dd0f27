"""
Shared pytest fixtures for the study-aids test suite.
All fixtures run the local engine — the remote backend is never called.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

# Force local mode — never call a remote backend during tests
os.environ["STUDY_AIDS_FORCE_LOCAL"] = "true"
os.environ.pop("STUDY_AIDS_API_URL", None)


import pytest

from factories import make_catalog

from study_aids.catalog import CuratedBank, default_catalog, sample_curated_bank
from study_aids.engine import AssessmentEngine


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def small_catalog():
    return make_catalog(3)


@pytest.fixture
def ba_catalog():
    return default_catalog()


@pytest.fixture
def sample_bank():
    return sample_curated_bank()


@pytest.fixture
def engine(ba_catalog):
    return AssessmentEngine(ba_catalog, CuratedBank())


@pytest.fixture
def curated_engine(ba_catalog, sample_bank):
    return AssessmentEngine(ba_catalog, sample_bank)
