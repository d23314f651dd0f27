"""
remote.py — REST client for the study-aids backend
==================================================
Thin synchronous wrapper over the backend's ``/study-aids/<module>`` routes.
Every response is wrapped as ``{"success": bool, "data": ...}``.

Any transport failure, non-2xx status, undecodable body, ``success: false``
or payload that does not validate is raised as ``RemoteUnavailable`` so the
calling service has exactly one exception to fall back on.  A 404 on a
single chapter is not a failure; it returns ``None``.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import httpx
from pydantic import ValidationError

from study_aids.models import (
    GradeResult,
    Lesson,
    StudyModule,
    SubmissionSummary,
    parse_question_items,
)

logger = logging.getLogger(__name__)


class RemoteUnavailable(RuntimeError):
    """The backend could not produce a usable answer."""


def _summary_from_payload(data: Any) -> SubmissionSummary:
    results = [
        GradeResult(id=str(r["id"]), correct=bool(r["correct"]), explanation=r.get("explanation"))
        for r in data.get("results", [])
    ]
    return SubmissionSummary(total=int(data["total"]), score=int(data["score"]), results=results)


class StudyAidsClient:
    """
    HTTP client for one study-aids module on the backend.

    Usage::

        with StudyAidsClient("https://api.example.org/api") as client:
            chapters = client.get_chapters()
            quiz     = client.get_quiz("3")
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        module_id: str = "ba",
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.module_id = module_id
        self._client = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "StudyAidsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ── transport ────────────────────────────────────────────────────────────

    def _request(self, method: str, path: str, *, allow_missing: bool = False, **kwargs: Any) -> Any:
        url = f"/study-aids/{self.module_id}{path}"
        try:
            resp = self._client.request(method, url, **kwargs)
            if allow_missing and resp.status_code == 404:
                return None
            resp.raise_for_status()
            body = resp.json()
        except httpx.HTTPError as exc:
            raise RemoteUnavailable(f"{method} {url}: {exc}") from exc
        except ValueError as exc:
            raise RemoteUnavailable(f"{method} {url}: response is not JSON") from exc

        if not isinstance(body, dict) or not body.get("success", False):
            raise RemoteUnavailable(f"{method} {url}: unexpected envelope")
        logger.debug("%s %s -> %s", method, url, resp.status_code)
        return body.get("data")

    def _parse(self, what: str, parse, data: Any) -> Any:
        try:
            return parse(data)
        except (ValidationError, KeyError, TypeError, ValueError, AttributeError) as exc:
            raise RemoteUnavailable(f"Invalid {what} payload: {exc}") from exc

    # ── endpoints ────────────────────────────────────────────────────────────

    def get_module(self) -> Optional[StudyModule]:
        data = self._request("GET", "")
        return self._parse("module", StudyModule.model_validate, data) if data else None

    def get_chapters(self) -> list[Lesson]:
        data = self._request("GET", "/chapters") or []
        return self._parse("chapter list", lambda d: [Lesson.model_validate(c) for c in d], data)

    def get_chapter(self, lesson_id: str) -> Optional[Lesson]:
        data = self._request("GET", f"/chapters/{lesson_id}", allow_missing=True)
        return self._parse("chapter", Lesson.model_validate, data) if data else None

    def get_quiz(self, lesson_id: str) -> list:
        data = self._request("GET", f"/chapters/{lesson_id}/quiz") or []
        return self._parse("quiz", parse_question_items, data)

    def submit_quiz(self, lesson_id: str, answers: Sequence[Any]) -> Optional[SubmissionSummary]:
        data = self._request("POST", f"/chapters/{lesson_id}/quiz/submit", json={"answers": list(answers)})
        return self._parse("quiz result", _summary_from_payload, data) if data else None

    def get_final_exam(self) -> list:
        data = self._request("GET", "/final-exam") or []
        return self._parse("final exam", parse_question_items, data)

    def submit_final_exam(self, answers: Sequence[Any]) -> Optional[SubmissionSummary]:
        data = self._request("POST", "/final-exam/submit", json={"answers": list(answers)})
        return self._parse("final exam result", _summary_from_payload, data) if data else None
