"""Prompt/schema/model resolution and end-to-end task calls against the stub CLI."""

from __future__ import annotations

import asyncio
import json

import pytest

from triage_wizard.agent import prompts, tasks
from triage_wizard.agent.schemas import SCHEMAS, schema_text
from triage_wizard.core.contracts.requests import (
    ClassifyRequest,
    CustomizeRequest,
    GenerateRequest,
    RefineRequest,
    SuggestRequest,
)
from triage_wizard.core.exceptions import CallerInputError


def _answer_line(payload) -> str:
    return json.dumps({"type": "result", "result": {"structured_output": payload}}) + "\n"


def test_defaults_used_when_caller_sends_no_prompt(sample_bug, settings_for):
    req = ClassifyRequest(provider="claude", bug=sample_bug)
    inv = tasks.build_invocation("classify", req, settings_for(), prompts.build_classify_prompt(sample_bug))
    assert "Bug ID: 1900001" in inv.prompt
    assert json.loads(inv.schema) == SCHEMAS["classify"]
    assert inv.model == "claude-sonnet-4-5-20250929"


def test_caller_prompt_schema_and_model_win(settings_for):
    req = ClassifyRequest.model_validate({
        "provider": "claude", "model": "claude-opus", "prompt": "custom", "schema": '{"type":"object"}',
    })
    inv = tasks.build_invocation("classify", req, settings_for(), "default prompt")
    assert (inv.prompt, inv.schema, inv.model) == ("custom", '{"type":"object"}', "claude-opus")


@pytest.mark.parametrize("body", [{"prompt": ""}, {"prompt": "  \n"}, {"schema": ""}])
def test_blank_caller_prompt_or_schema_rejected(settings_for, body):
    req = ClassifyRequest.model_validate({"provider": "claude", **body})
    with pytest.raises(CallerInputError):
        tasks.build_invocation("classify", req, settings_for(), "default prompt")


def test_classify_end_to_end(make_stub, settings_for, sample_bug):
    stub = make_stub(stdout=_answer_line({
        "ai_detected_str": True,
        "crashstack_present": True,
        "summary": "UAF in reflow",
        "suggested_actions": [{"action": "set-has-str", "reason": "STR present"}, {"bogus": 1}],
    }))
    resp = asyncio.run(tasks.classify_bug(ClassifyRequest(provider="claude", bug=sample_bug), settings_for(stub)))
    assert resp.ai_detected_str and resp.crashstack_present
    assert resp.ai_detected_test_attached is False
    assert len(resp.suggested_actions) == 1
    assert stub.args[stub.args.index("--json-schema") + 1] == schema_text("classify")


def test_customize_direct_shape_answer(make_stub, settings_for, sample_bug):
    stub = make_stub(stdout='{"final_response":"Thanks for the report"}')
    req = CustomizeRequest.model_validate({
        "provider": "claude", "bug": sample_bug,
        "cannedResponse": {"id": "need-str", "title": "Need STR", "bodyTemplate": "Please add STR for {{BUG_ID}}"},
    })
    resp = asyncio.run(tasks.customize_response(req, settings_for(stub)))
    assert resp.final_response == "Thanks for the report"
    assert resp.used_canned_id == "need-str"
    assert "Please add STR" in stub.stdin


def test_suggest_generate_refine_end_to_end(make_stub, settings_for, sample_bug):
    canned = [{"id": "dup", "title": "Duplicate", "bodyTemplate": "x" * 500}, {"title": "no id"}]

    stub = make_stub(stdout=_answer_line({"suggested_response_id": "dup", "draft_response": "Dup"}))
    req = SuggestRequest.model_validate({"provider": "claude", "bug": sample_bug, "cannedResponses": canned})
    assert asyncio.run(tasks.suggest_response(req, settings_for(stub))).suggested_response_id == "dup"
    assert "ID: dup" in stub.stdin and "no id" not in stub.stdin

    stub = make_stub(stdout=_answer_line({"response_text": "Hi", "suggested_actions": [], "reasoning": "r"}))
    req = GenerateRequest.model_validate({"provider": "claude", "bug": sample_bug, "options": {"mode": "next-steps"}})
    assert asyncio.run(tasks.generate_response(req, settings_for(stub))).response_text == "Hi"
    assert "recommend the next triage actions" in stub.stdin

    stub = make_stub(stdout=_answer_line({"refined_response": "Shorter", "changes_made": ["trimmed"]}))
    req = RefineRequest.model_validate({
        "provider": "claude", "bug": sample_bug, "currentResponse": "Long text", "userInstruction": "Make it shorter",
    })
    resp = asyncio.run(tasks.refine_response(req, settings_for(stub)))
    assert resp.changes_made == ["trimmed"]
    assert "Make it shorter" in stub.stdin and "Long text" in stub.stdin


def test_default_prompts_tolerate_odd_bug_shapes():
    bug = {"id": None, "summary": 5, "comments": ["not a dict", {"raw_text": "raw"}], "attachments": [None]}
    assert "No summary" in prompts.build_classify_prompt(bug)
    assert "raw" in prompts.build_testpage_prompt(bug)
    assert "Bug ID: 0" in prompts.build_generate_prompt(bug, {"cannedResponses": "nope"})
