from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TaskRequest(BaseModel):
    """Fields shared by every /api/ai/* call. The frontend sends camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    provider: str
    model: str | None = None
    bug: dict[str, Any] = Field(default_factory=dict)
    prompt: str | None = None  # pre-built prompt from the frontend
    json_schema: str | None = Field(default=None, alias="schema")


class ClassifyRequest(TaskRequest):
    pass


class CustomizeRequest(TaskRequest):
    canned_response: dict[str, Any] = Field(default_factory=dict)


class SuggestRequest(TaskRequest):
    canned_responses: list[dict[str, Any]]


class GenerateRequest(TaskRequest):
    options: dict[str, Any] = Field(default_factory=dict)  # mode, cannedResponses, ...


class RefineRequest(TaskRequest):
    current_response: str
    user_instruction: str
    context: dict[str, Any] = Field(default_factory=dict)


class TestPageRequest(TaskRequest):
    __test__ = False
