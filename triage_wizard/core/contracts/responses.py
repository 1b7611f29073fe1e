"""Typed answers for each task.

Agent answers are decoded defensively: a missing or mistyped field falls back to
its default and malformed list elements are dropped one by one, so an odd but
present answer still yields a best-effort response.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


def _obj(answer: Any) -> dict[str, Any]:
    return answer if isinstance(answer, dict) else {}


def _bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else False


def _str(data: dict[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return value if isinstance(value, str) else default


def _opt_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _items(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key)
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class TriageAction(BaseModel):
    action: str
    reason: str

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> TriageAction | None:
        action, reason = item.get("action"), item.get("reason")
        if not isinstance(action, str) or not isinstance(reason, str):
            return None
        return cls(action=action, reason=reason)


class SuggestedAction(BaseModel):
    action: str
    reason: str | None = None

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> SuggestedAction | None:
        action = item.get("action")
        if not isinstance(action, str):
            return None
        return cls(action=action, reason=_opt_str(item, "reason"))


class ClassifyResponse(BaseModel):
    ai_detected_str: bool = False
    ai_detected_test_attached: bool = False
    crashstack_present: bool = False
    fuzzing_testcase: bool = False
    summary: str = ""
    suggested_severity: str | None = None
    suggested_priority: str | None = None
    suggested_actions: list[TriageAction] = Field(default_factory=list)
    triage_reasoning: str | None = None
    suggested_canned_id: str | None = None
    draft_response: str | None = None
    notes: Any = None

    @classmethod
    def from_answer(cls, answer: Any) -> ClassifyResponse:
        data = _obj(answer)
        actions = [TriageAction.from_item(i) for i in _items(data, "suggested_actions")]
        return cls(
            ai_detected_str=_bool(data, "ai_detected_str"),
            ai_detected_test_attached=_bool(data, "ai_detected_test_attached"),
            crashstack_present=_bool(data, "crashstack_present"),
            fuzzing_testcase=_bool(data, "fuzzing_testcase"),
            summary=_str(data, "summary"),
            suggested_severity=_opt_str(data, "suggested_severity"),
            suggested_priority=_opt_str(data, "suggested_priority"),
            suggested_actions=[a for a in actions if a is not None],
            triage_reasoning=_opt_str(data, "triage_reasoning"),
            suggested_canned_id=_opt_str(data, "suggested_canned_id"),
            draft_response=_opt_str(data, "draft_response"),
        )


class CustomizeResponse(BaseModel):
    final_response: str = ""
    used_canned_id: str = ""
    notes: Any = None

    @classmethod
    def from_answer(cls, answer: Any, canned_id: str = "unknown") -> CustomizeResponse:
        data = _obj(answer)
        return cls(
            final_response=_str(data, "final_response"),
            used_canned_id=_str(data, "used_canned_id", default=canned_id),
        )


class SuggestResponse(BaseModel):
    suggested_response_id: str = ""
    draft_response: str = ""
    reasoning: str | None = None

    @classmethod
    def from_answer(cls, answer: Any) -> SuggestResponse:
        data = _obj(answer)
        return cls(
            suggested_response_id=_str(data, "suggested_response_id"),
            draft_response=_str(data, "draft_response"),
            reasoning=_opt_str(data, "reasoning"),
        )


class GenerateResponse(BaseModel):
    response_text: str = ""
    suggested_actions: list[SuggestedAction] = Field(default_factory=list)
    used_canned_ids: list[str] = Field(default_factory=list)
    reasoning: str = ""

    @classmethod
    def from_answer(cls, answer: Any) -> GenerateResponse:
        data = _obj(answer)
        actions = [SuggestedAction.from_item(i) for i in _items(data, "suggested_actions")]
        return cls(
            response_text=_str(data, "response_text"),
            suggested_actions=[a for a in actions if a is not None],
            used_canned_ids=_str_list(data, "used_canned_ids"),
            reasoning=_str(data, "reasoning"),
        )


class RefineResponse(BaseModel):
    refined_response: str = ""
    changes_made: list[str] = Field(default_factory=list)

    @classmethod
    def from_answer(cls, answer: Any) -> RefineResponse:
        data = _obj(answer)
        return cls(
            refined_response=_str(data, "refined_response"),
            changes_made=_str_list(data, "changes_made"),
        )


class TestPageResponse(BaseModel):
    __test__ = False

    can_generate: bool = False
    html_content: str = ""
    reason: str = ""

    @classmethod
    def from_answer(cls, answer: Any) -> TestPageResponse:
        data = _obj(answer)
        return cls(
            can_generate=_bool(data, "can_generate"),
            html_content=_str(data, "html_content"),
            reason=_str(data, "reason"),
        )


class ErrorResponse(BaseModel):
    error: str
    category: str
    details: str | None = None
