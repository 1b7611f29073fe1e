"""One coroutine per triage task: resolve prompt/schema/model, invoke the CLI, decode the answer."""
from __future__ import annotations

from typing import Any

from triage_wizard.agent import prompts
from triage_wizard.agent.runner import InvocationRequest, invoke_structured
from triage_wizard.agent.schemas import MARKER_KEYS, schema_text
from triage_wizard.core.config.models import Settings
from triage_wizard.core.contracts.requests import (
    ClassifyRequest,
    CustomizeRequest,
    GenerateRequest,
    RefineRequest,
    SuggestRequest,
    TaskRequest,
    TestPageRequest,
)
from triage_wizard.core.contracts.responses import (
    ClassifyResponse,
    CustomizeResponse,
    GenerateResponse,
    RefineResponse,
    SuggestResponse,
    TestPageResponse,
)
from triage_wizard.core.exceptions import CallerInputError


def build_invocation(task: str, req: TaskRequest, settings: Settings, default_prompt: str) -> InvocationRequest:
    """Prefer the caller's prompt and schema; fall back to the built-in ones.

    A prompt or schema that is sent but blank is rejected rather than replaced.
    """
    if req.prompt is not None and not req.prompt.strip():
        raise CallerInputError("Prompt must not be empty")
    if req.json_schema is not None and not req.json_schema.strip():
        raise CallerInputError("Schema must not be empty")
    return InvocationRequest(
        prompt=req.prompt if req.prompt is not None else default_prompt,
        schema=req.json_schema if req.json_schema is not None else schema_text(task),
        model=req.model or settings.claude_model,
    )


async def _run(task: str, req: TaskRequest, settings: Settings, default_prompt: str) -> Any:
    invocation = build_invocation(task, req, settings, default_prompt)
    return await invoke_structured(
        invocation,
        MARKER_KEYS[task],
        binary=settings.agent_binary,
        timeout=settings.agent_timeout_seconds,
    )


async def classify_bug(req: ClassifyRequest, settings: Settings) -> ClassifyResponse:
    answer = await _run("classify", req, settings, prompts.build_classify_prompt(req.bug))
    return ClassifyResponse.from_answer(answer)


async def customize_response(req: CustomizeRequest, settings: Settings) -> CustomizeResponse:
    canned_id = req.canned_response.get("id")
    if not isinstance(canned_id, str):
        canned_id = "unknown"
    answer = await _run(
        "customize", req, settings, prompts.build_customize_prompt(req.bug, req.canned_response)
    )
    return CustomizeResponse.from_answer(answer, canned_id=canned_id)


async def suggest_response(req: SuggestRequest, settings: Settings) -> SuggestResponse:
    answer = await _run(
        "suggest", req, settings, prompts.build_suggest_prompt(req.bug, req.canned_responses)
    )
    return SuggestResponse.from_answer(answer)


async def generate_response(req: GenerateRequest, settings: Settings) -> GenerateResponse:
    answer = await _run("generate", req, settings, prompts.build_generate_prompt(req.bug, req.options))
    return GenerateResponse.from_answer(answer)


async def refine_response(req: RefineRequest, settings: Settings) -> RefineResponse:
    default_prompt = prompts.build_refine_prompt(
        req.bug, req.current_response, req.user_instruction, req.context
    )
    answer = await _run("refine", req, settings, default_prompt)
    return RefineResponse.from_answer(answer)


async def generate_testpage(req: TestPageRequest, settings: Settings) -> TestPageResponse:
    answer = await _run("testpage", req, settings, prompts.build_testpage_prompt(req.bug))
    return TestPageResponse.from_answer(answer)
