"""Recover the structured answer from Claude CLI console output.

The CLI prints one or more newline-delimited JSON records; progress records and
the final ``result`` record share the same envelope. Recognized shapes, first
match wins:

1. a line ``{"type": "result", "result": {"structured_output": ...}}``
2. the whole output as one object carrying ``structured_output``
3. the whole output as a bare answer object holding one of the caller's marker keys
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import Any

from triage_wizard.core.exceptions import ExtractionError

log = logging.getLogger("agent.extractor")


def _parse_envelope(line: str) -> dict[str, Any] | None:
    """Decode one line as an envelope record, or None if it has another shape."""
    try:
        record = json.loads(line)
    except ValueError:
        return None
    if not isinstance(record, dict):
        return None
    for key in ("type", "subtype"):
        if not isinstance(record.get(key), (str, type(None))):
            return None
    result = record.get("result")
    if result is None:
        return record
    if not isinstance(result, dict) or not isinstance(result.get("type"), (str, type(None))):
        return None
    return record


def _scan_lines(output: str) -> Any | None:
    # only "\n" ends a record; U+2028 and friends may appear raw inside JSON strings
    for line in output.split("\n"):
        line = line.removesuffix("\r")
        if not line.strip():
            continue
        record = _parse_envelope(line)
        if record is None or record.get("type") != "result":
            continue
        result = record.get("result") or {}
        structured = result.get("structured_output")
        if structured is not None:
            return structured
    return None


def extract_structured_output(output: str, marker_keys: Iterable[str] = ()) -> Any:
    """Return the agent's answer from its captured stdout.

    Raises ExtractionError carrying the full output when nothing matches.
    """
    structured = _scan_lines(output)
    if structured is not None:
        log.info("Extracted structured output from result record")
        return structured

    try:
        whole = json.loads(output)
    except ValueError:
        whole = None
    if isinstance(whole, dict):
        if "structured_output" in whole:
            log.info("Extracted structured output from whole-text object")
            return whole["structured_output"]
        if any(key in whole for key in marker_keys):
            log.info("Agent output is a bare answer object")
            return whole

    log.error("No structured output found in agent output (%s chars)", len(output))
    raise ExtractionError("Failed to parse Claude CLI output", details=f"Output: {output}")
