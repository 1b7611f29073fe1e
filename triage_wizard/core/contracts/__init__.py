from triage_wizard.core.contracts.requests import (
    TaskRequest,
    ClassifyRequest,
    CustomizeRequest,
    SuggestRequest,
    GenerateRequest,
    RefineRequest,
    TestPageRequest,
)
from triage_wizard.core.contracts.responses import (
    ClassifyResponse,
    CustomizeResponse,
    SuggestResponse,
    GenerateResponse,
    RefineResponse,
    TestPageResponse,
    TriageAction,
    SuggestedAction,
    ErrorResponse,
)

__all__ = [
    "TaskRequest",
    "ClassifyRequest",
    "CustomizeRequest",
    "SuggestRequest",
    "GenerateRequest",
    "RefineRequest",
    "TestPageRequest",
    "ClassifyResponse",
    "CustomizeResponse",
    "SuggestResponse",
    "GenerateResponse",
    "RefineResponse",
    "TestPageResponse",
    "TriageAction",
    "SuggestedAction",
    "ErrorResponse",
]
