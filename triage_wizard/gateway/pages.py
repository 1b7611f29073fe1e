"""HTML for GET /status."""
from html import escape

from triage_wizard.agent.probe import CliStatus
from triage_wizard.core.config.models import BackendMode, Settings

ENDPOINTS = [
    ("Health", "GET /health"),
    ("Classify", "POST /api/ai/classify"),
    ("Customize", "POST /api/ai/customize"),
    ("Suggest", "POST /api/ai/suggest-response"),
    ("Generate", "POST /api/ai/generate"),
    ("Refine", "POST /api/ai/refine"),
    ("Test page", "POST /api/ai/testpage"),
]

_STYLE = """
body { font-family: system-ui, sans-serif; max-width: 700px; margin: 50px auto; padding: 20px; }
.status-card { background: #f8f9fa; border-radius: 8px; padding: 20px; margin: 20px 0; }
.status-row { display: flex; justify-content: space-between; padding: 10px 0; border-bottom: 1px solid #eee; }
.status-row:last-child { border-bottom: none; }
.label { font-weight: 500; color: #555; }
.value { font-family: monospace; }
code { background: #e9ecef; padding: 2px 6px; border-radius: 3px; }
"""


def _row(label: str, value: str) -> str:
    return f'<div class="status-row"><span class="label">{label}</span><span class="value">{value}</span></div>'


def _card(title: str, rows: list[str]) -> str:
    return f'<div class="status-card"><h3>{title}</h3>{"".join(rows)}</div>'


def render_status_page(settings: Settings, cli: CliStatus, version: str) -> str:
    mode = "Claude Code CLI (recommended)" if settings.claude_mode is BackendMode.CLI else "HTTP API"
    mark = "✅" if cli.available else "❌"
    server = _card("Server", [
        _row("Status", "✅ Running"),
        _row("Version", escape(version)),
        _row("Mode", mode),
    ])
    claude = _card("Claude Code CLI", [
        _row("Available", f"{mark} {'Yes' if cli.available else 'No'}"),
        _row("Version", escape(cli.version)),
    ])
    endpoints = _card("API Endpoints", [_row(label, f"<code>{path}</code>") for label, path in ENDPOINTS])
    return (
        "<!DOCTYPE html><html><head><title>Triage Wizard - Backend Status</title>"
        f"<style>{_STYLE}</style></head><body>"
        '<div class="nav"><a href="/">← Back to App</a></div><h1>Backend Status</h1>'
        f"{server}{claude}{endpoints}"
        "<p><small>Refresh this page to re-check status.</small></p></body></html>"
    )
