"""Triage Wizard backend: proxies AI calls to the Claude CLI and serves the frontend.

Run with: python -m triage_wizard.gateway.main
"""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
log = logging.getLogger("gateway")

from triage_wizard import __version__
from triage_wizard.agent import tasks
from triage_wizard.agent.probe import probe_agent_cli
from triage_wizard.agent.providers import Provider, ensure_cli_backend
from triage_wizard.core.config.models import BackendMode, Settings
from triage_wizard.core.contracts.requests import (
    ClassifyRequest,
    CustomizeRequest,
    GenerateRequest,
    RefineRequest,
    SuggestRequest,
    TestPageRequest,
)
from triage_wizard.core.contracts.responses import (
    ClassifyResponse,
    CustomizeResponse,
    ErrorResponse,
    GenerateResponse,
    RefineResponse,
    SuggestResponse,
    TestPageResponse,
)
from triage_wizard.core.exceptions import TriageError
from triage_wizard.gateway.deps import PROJECT_ROOT, get_settings
from triage_wizard.gateway.middleware import RequestIDMiddleware
from triage_wizard.gateway.pages import render_status_page

NO_CACHE = {"Cache-Control": "no-cache, no-store, must-revalidate"}

app = FastAPI(title="Triage Wizard Backend", version=__version__)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


def request_settings(request: Request, settings: Settings = Depends(get_settings)) -> Settings:
    request.state.settings = settings
    return settings


def _truncate(text: str | None, limit: int) -> str | None:
    if text is None or len(text) <= limit:
        return text
    return text[:limit] + f"… (truncated, {len(text)} chars total)"


@app.exception_handler(TriageError)
async def triage_error_handler(request: Request, exc: TriageError):
    settings = getattr(request.state, "settings", None)
    limit = settings.max_error_detail_chars if settings else Settings().max_error_detail_chars
    body = ErrorResponse(error=exc.message, category=exc.category, details=_truncate(exc.details, limit))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


@app.on_event("startup")
def startup():
    settings = get_settings()
    log.info("Claude backend mode: %s", settings.claude_mode.value)
    if settings.claude_mode is BackendMode.CLI:
        log.info("Using Claude Code CLI - ensure '%s' is installed and authenticated", settings.agent_binary)
    log.info("Serving frontend from: %s", settings.frontend_dir)


@app.get("/health")
async def health(settings: Settings = Depends(request_settings)):
    """Report which providers this backend can serve, for frontend auto-configuration."""
    cli = await probe_agent_cli(settings.agent_binary)
    available = [Provider.CLAUDE.value] if cli.available else []
    return {
        "status": "ok",
        "version": __version__,
        "availableProviders": available,
        "recommendedProvider": available[0] if available else None,
    }


@app.get("/status", response_class=HTMLResponse)
async def status_page(settings: Settings = Depends(request_settings)):
    cli = await probe_agent_cli(settings.agent_binary)
    return HTMLResponse(render_status_page(settings, cli, __version__))


@app.post("/api/ai/classify", response_model=ClassifyResponse, response_model_exclude_none=True)
async def classify(req: ClassifyRequest, settings: Settings = Depends(request_settings)):
    log.info("Classify request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "classify", settings)
    return await tasks.classify_bug(req, settings)


@app.post("/api/ai/customize", response_model=CustomizeResponse, response_model_exclude_none=True)
async def customize(req: CustomizeRequest, settings: Settings = Depends(request_settings)):
    log.info("Customize request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "customize", settings)
    return await tasks.customize_response(req, settings)


@app.post("/api/ai/suggest-response", response_model=SuggestResponse, response_model_exclude_none=True)
async def suggest(req: SuggestRequest, settings: Settings = Depends(request_settings)):
    log.info("Suggest request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "suggest", settings)
    return await tasks.suggest_response(req, settings)


@app.post("/api/ai/generate", response_model=GenerateResponse, response_model_exclude_none=True)
async def generate(req: GenerateRequest, settings: Settings = Depends(request_settings)):
    log.info("Generate request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "generate", settings)
    return await tasks.generate_response(req, settings)


@app.post("/api/ai/refine", response_model=RefineResponse)
async def refine(req: RefineRequest, settings: Settings = Depends(request_settings)):
    log.info("Refine request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "refine", settings)
    return await tasks.refine_response(req, settings)


@app.post("/api/ai/testpage", response_model=TestPageResponse)
async def testpage(req: TestPageRequest, settings: Settings = Depends(request_settings)):
    log.info("Test page generation request for provider: %s", req.provider)
    ensure_cli_backend(req.provider, "testpage", settings)
    return await tasks.generate_testpage(req, settings)


@app.get("/{path:path}")
def frontend(path: str, settings: Settings = Depends(request_settings)):
    """Serve the static frontend. Registered last so API routes take precedence."""
    root = Path(settings.frontend_dir)
    if not root.is_absolute():
        root = PROJECT_ROOT / root
    root = root.resolve()
    target = (root / path).resolve()
    if not target.is_relative_to(root):
        raise HTTPException(status_code=404, detail="Not found")
    if target.is_dir():
        target = target / "index.html"
    if not target.is_file():
        raise HTTPException(status_code=404, detail="Not found")
    return FileResponse(target, headers=NO_CACHE)


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    logging.getLogger().setLevel(_settings.log_level.upper())
    uvicorn.run(app, host=_settings.host, port=_settings.port)
