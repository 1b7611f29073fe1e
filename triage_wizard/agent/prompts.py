"""Default prompts, used when the frontend does not send a pre-built one."""
from __future__ import annotations

from typing import Any

SYSTEM_CONTEXT = """You are a Mozilla Firefox bug triager assistant. Your role is to help triage Bugzilla bugs efficiently and professionally.

Guidelines:
- Be conservative: only report what the bug text clearly supports
- Be concise and actionable
- Use a helpful, welcoming tone appropriate for an open source community"""


def _text(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _trunc(s: str, max_len: int) -> str:
    return s[:max_len]


def _bug_header(bug: dict[str, Any]) -> tuple[Any, str, str]:
    bug_id = bug.get("id") if isinstance(bug.get("id"), (int, str)) else 0
    return bug_id, _text(bug.get("summary"), "No summary"), _text(bug.get("description"))


def _comments_text(bug: dict[str, Any], limit: int, max_len: int | None = None) -> str:
    comments = bug.get("comments")
    if not isinstance(comments, list):
        return ""
    texts = []
    for c in comments:
        if not isinstance(c, dict):
            continue
        text = c.get("text") if isinstance(c.get("text"), str) else c.get("raw_text")
        if isinstance(text, str):
            texts.append(text if max_len is None else _trunc(text, max_len))
        if len(texts) >= limit:
            break
    return "\n---\n".join(texts)


def _attachments_text(bug: dict[str, Any]) -> str:
    attachments = bug.get("attachments")
    if not isinstance(attachments, list):
        return ""
    lines = []
    for att in attachments:
        if isinstance(att, dict):
            name = _text(att.get("filename"), "unnamed")
            desc = _text(att.get("description"), "No description")
            lines.append(f"- {name}: {desc}")
    return "\n".join(lines)


def _canned_summary(resp: dict[str, Any], preview_len: int) -> str | None:
    canned_id = resp.get("id")
    if not isinstance(canned_id, str):
        return None
    title = _text(resp.get("title"))
    desc = _text(resp.get("description"))
    body = _trunc(_text(resp.get("bodyTemplate")), preview_len)
    return f"---\nID: {canned_id}\nTitle: {title}\nDescription: {desc}\nBody Preview: {body}\n"


def build_classify_prompt(bug: dict[str, Any]) -> str:
    bug_id, summary, description = _bug_header(bug)
    comments = _comments_text(bug, limit=5)
    return f"""{SYSTEM_CONTEXT}

Analyze this bug and classify it.

Bug ID: {bug_id}
Summary: {summary}

Description:
{description}

Comments:
{comments}

Analyze this bug and determine:
1. ai_detected_str: Are there clear steps to reproduce (STR) in the text?
2. ai_detected_test_attached: Is there a testcase file, reproduction HTML/JS, or test code referenced?
3. crashstack_present: Is there a crash stack trace, AddressSanitizer/ASan output, or similar?
4. fuzzing_testcase: Does this appear to be from fuzzing (mentions fuzzilli, oss-fuzz, grizzly, etc.)?
5. summary: Write a brief 1-3 sentence summary of what this bug is about for triagers.

Be conservative - only mark true if you have clear evidence."""


def build_customize_prompt(bug: dict[str, Any], canned_response: dict[str, Any]) -> str:
    bug_id, summary, _ = _bug_header(bug)
    canned_id = _text(canned_response.get("id"), "unknown")
    return f"""{SYSTEM_CONTEXT}

Customize this canned response for the specific bug.

Bug ID: {bug_id}
Bug Summary: {summary}

Canned Response Template:
ID: {canned_id}
Title: {_text(canned_response.get("title"))}
Body:
{_text(canned_response.get("bodyTemplate"))}

Replace any placeholders (like {{BUG_ID}}, {{VERSION}}, etc.) with appropriate content based on the bug details. Keep the tone professional and helpful.

Return the customized response text."""


def build_suggest_prompt(bug: dict[str, Any], canned_responses: list[dict[str, Any]]) -> str:
    bug_id, summary, description = _bug_header(bug)
    responses = "".join(
        s for s in (_canned_summary(r, 200) for r in canned_responses if isinstance(r, dict)) if s
    )
    return f"""{SYSTEM_CONTEXT}

Suggest the best canned response for this bug and draft a customized version.

Bug ID: {bug_id}
Bug Summary: {summary}
Description:
{description}

Available Canned Responses:
{responses}

Analyze the bug and:
1. Choose the most appropriate canned response ID
2. Draft a customized response for this specific bug
3. Briefly explain why you chose this response

If no response fits well, choose the closest match and explain."""


def build_generate_prompt(bug: dict[str, Any], options: dict[str, Any]) -> str:
    bug_id, summary, description = _bug_header(bug)
    comments = _comments_text(bug, limit=5, max_len=1000)
    attachments = _attachments_text(bug)
    canned = options.get("cannedResponses")
    canned_text = ""
    if isinstance(canned, list):
        canned_text = "".join(
            s for s in (_canned_summary(r, 150) for r in canned if isinstance(r, dict)) if s
        )

    if options.get("mode") == "next-steps":
        task = """Analyze this bug and recommend the next triage actions.

Consider:
- Does the bug need more information? (STR, profile, testcase, system info)
- Should any flags be set? (Has STR, Need Info)
- Is this potentially a duplicate or known issue?
- What priority/severity seems appropriate based on the description?"""
    else:
        task = """Draft a polite, professional triage comment for this bug.

The response should:
- Thank the reporter if appropriate
- Request specific missing information if needed
- Provide helpful guidance or next steps"""

    sections = [
        SYSTEM_CONTEXT,
        f"## Bug Information\n\nBug ID: {bug_id}\nSummary: {summary}",
        f"## Description\n\n{description}",
    ]
    if comments:
        sections.append(f"## Recent Comments\n\n{comments}")
    if attachments:
        sections.append(f"## Attachments\n\n{attachments}")
    if canned_text:
        sections.append(f"## Available Canned Responses (for reference)\n\n{canned_text}")
    sections.append(f"## Task\n\n{task}")
    return "\n\n".join(sections)


def build_refine_prompt(
    bug: dict[str, Any],
    current_response: str,
    user_instruction: str,
    context: dict[str, Any],
) -> str:
    bug_id, summary, description = _bug_header(bug)
    canned_ref = ""
    selected = context.get("selectedCannedResponse")
    if isinstance(selected, dict):
        canned_ref = (
            "## Reference Canned Response\n\n"
            f"ID: {_text(selected.get('id'))}\n"
            f"Title: {_text(selected.get('title'), 'Untitled')}\n\n"
            f"Template:\n{_text(selected.get('bodyTemplate'))}\n\n"
        )
    return f"""{SYSTEM_CONTEXT}

## Task

Refine an existing triage response based on user instructions.

## Bug Context

Bug ID: {bug_id}
Summary: {summary}

Description:
{_trunc(description, 500)}

## Current Response

{current_response}

## User Instruction

{user_instruction}

{canned_ref}## Instructions

1. Apply the user's instruction to modify the current response
2. Keep the response professional and appropriate for a Bugzilla comment
3. Preserve parts of the original that aren't affected by the instruction"""


def build_testpage_prompt(bug: dict[str, Any]) -> str:
    bug_id, summary, description = _bug_header(bug)
    comments = _comments_text(bug, limit=10, max_len=3000)
    attachments = _attachments_text(bug)
    return f"""You are an elite front-end engineer with deep knowledge of browser rendering, JavaScript, CSS, and Web APIs.

Given a bug report, decide whether a test page can be generated and if so, output a SINGLE, SELF-CONTAINED HTML test page that reproduces or illustrates the bug.

## Bug Information

Bug ID: {bug_id}
Summary: {summary}

## Description

{description}

## Comments

{comments}

## Attachments

{attachments}

## Task

1. Determine if a meaningful test page can be generated from this bug report.
2. If YES, generate a complete HTML page using only vanilla HTML/CSS/JS, with CSS in <style> and JS in <script>, a button to trigger the test, and the bug ID in the page title.
3. If NO, explain why (browser internals, no code provided, hardware-specific, etc.).

The html_content must be raw HTML without markdown fences, starting with <!DOCTYPE html> or <html>."""
