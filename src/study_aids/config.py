"""
config.py — Central settings for the study-aids engine and service
==================================================================
All configuration is loaded from environment variables / .env file.

Remote mode activates automatically when STUDY_AIDS_API_URL contains a real
(non-placeholder) value and STUDY_AIDS_FORCE_LOCAL is not set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from study_aids.models import DEFAULT_EXAM_SIZE, DEFAULT_MAX_PER_LESSON

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)


# ─── Helpers ────────────────────────────────────────────────────────────────

def _is_placeholder(value: str) -> bool:
    """Return True if the value looks like an unfilled template placeholder."""
    return not value or "<" in value or value.startswith("your-") or value == "PLACEHOLDER"


# ─── Engine ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class EngineConfig:
    exam_size:      int
    max_per_lesson: int


# ─── Content sources ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ContentConfig:
    catalog_path:       str   # empty → bundled catalog
    curated_bank_path:  str   # empty → no curated bank

    @property
    def uses_bundled_catalog(self) -> bool:
        return _is_placeholder(self.catalog_path)

    @property
    def has_curated_bank(self) -> bool:
        return not _is_placeholder(self.curated_bank_path)


# ─── Remote study-aids backend ───────────────────────────────────────────────

@dataclass(frozen=True)
class RemoteConfig:
    base_url: str
    timeout:  float

    @property
    def is_configured(self) -> bool:
        return not _is_placeholder(self.base_url)


# ─── App-level settings ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    force_local: bool
    log_level:   str


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    engine:  EngineConfig
    content: ContentConfig
    remote:  RemoteConfig
    app:     AppConfig

    @property
    def remote_enabled(self) -> bool:
        """True when a real backend URL is set and STUDY_AIDS_FORCE_LOCAL is false."""
        return self.remote.is_configured and not self.app.force_local

    def status_summary(self) -> dict[str, str]:
        """Return a dict of component → status for display."""
        return {
            "Catalog":       "bundled" if self.content.uses_bundled_catalog else self.content.catalog_path,
            "Curated bank":  self.content.curated_bank_path if self.content.has_curated_bank else "none",
            "Remote API":    self.remote.base_url if self.remote_enabled else "disabled (local engine)",
            "Exam size":     str(self.engine.exam_size),
            "Max per lesson": str(self.engine.max_per_lesson),
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str   = lambda k, d="": os.getenv(k, d).strip()
    _int   = lambda k, d=0: int(os.getenv(k, str(d)) or d)
    _float = lambda k, d=0.0: float(os.getenv(k, str(d)) or d)
    _bool  = lambda k, d=False: os.getenv(k, str(d)).lower() in ("1", "true", "yes")

    return Settings(
        engine=EngineConfig(
            exam_size      = _int("STUDY_AIDS_EXAM_SIZE", DEFAULT_EXAM_SIZE),
            max_per_lesson = _int("STUDY_AIDS_MAX_PER_LESSON", DEFAULT_MAX_PER_LESSON),
        ),
        content=ContentConfig(
            catalog_path      = _str("STUDY_AIDS_CATALOG_PATH"),
            curated_bank_path = _str("STUDY_AIDS_CURATED_BANK_PATH"),
        ),
        remote=RemoteConfig(
            base_url = _str("STUDY_AIDS_API_URL").rstrip("/"),
            timeout  = _float("STUDY_AIDS_API_TIMEOUT", 10.0),
        ),
        app=AppConfig(
            force_local = _bool("STUDY_AIDS_FORCE_LOCAL", False),
            log_level   = _str("STUDY_AIDS_LOG_LEVEL", "WARNING").upper(),
        ),
    )
