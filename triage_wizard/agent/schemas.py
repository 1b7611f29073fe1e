"""Default JSON schemas passed to ``--json-schema`` and the marker keys of each answer shape."""
import json
from typing import Any

_ACTION_ITEM = {
    "type": "object",
    "properties": {
        "action": {"type": "string", "description": "Action like need-info, set-has-str, close-duplicate, assign-component"},
        "reason": {"type": "string", "description": "Why this action is recommended"},
    },
}

SCHEMAS: dict[str, dict[str, Any]] = {
    "classify": {
        "type": "object",
        "properties": {
            "ai_detected_str": {
                "type": "boolean",
                "description": "True if clear, specific steps to reproduce are found in the bug text",
            },
            "ai_detected_test_attached": {
                "type": "boolean",
                "description": "True if a testcase file, reproduction HTML/JS, or test code is referenced",
            },
            "crashstack_present": {
                "type": "boolean",
                "description": "True if crash stack traces, AddressSanitizer/ASan output, or similar is present",
            },
            "fuzzing_testcase": {
                "type": "boolean",
                "description": "True if this appears to be from fuzzing (fuzzilli, oss-fuzz, grizzly, etc.)",
            },
            "summary": {"type": "string", "description": "Brief 1-3 sentence summary of the bug for triagers"},
            "suggested_severity": {"type": "string", "enum": ["--", "S1", "S2", "S3", "S4", "N/A"]},
            "suggested_priority": {"type": "string", "enum": ["--", "P1", "P2", "P3", "P5"]},
            "suggested_actions": {"type": "array", "items": {**_ACTION_ITEM, "required": ["action", "reason"]}},
            "triage_reasoning": {"type": "string", "description": "Brief explanation of the overall triage assessment"},
            "suggested_canned_id": {
                "type": "string",
                "description": "ID of the most appropriate canned response template, or empty string if none fit",
            },
            "draft_response": {"type": "string", "description": "A response draft tailored for this specific bug"},
        },
        "required": ["ai_detected_str", "ai_detected_test_attached", "crashstack_present", "fuzzing_testcase", "summary"],
    },
    "customize": {
        "type": "object",
        "properties": {
            "final_response": {"type": "string", "description": "The customized response text ready to post"},
            "used_canned_id": {"type": "string", "description": "The ID of the canned response that was customized"},
        },
        "required": ["final_response", "used_canned_id"],
    },
    "suggest": {
        "type": "object",
        "properties": {
            "suggested_response_id": {"type": "string", "description": "The ID of the most appropriate canned response"},
            "draft_response": {"type": "string", "description": "A draft response customized for this bug"},
            "reasoning": {"type": "string", "description": "Brief explanation of why this response was chosen"},
        },
        "required": ["suggested_response_id", "draft_response"],
    },
    "generate": {
        "type": "object",
        "properties": {
            "response_text": {"type": "string", "description": "The triage comment to post"},
            "suggested_actions": {"type": "array", "items": {**_ACTION_ITEM, "required": ["action"]}},
            "used_canned_ids": {"type": "array", "items": {"type": "string"}},
            "reasoning": {"type": "string", "description": "Brief explanation of the triage approach"},
        },
        "required": ["response_text", "suggested_actions", "reasoning"],
    },
    "refine": {
        "type": "object",
        "properties": {
            "refined_response": {"type": "string", "description": "The updated response text"},
            "changes_made": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["refined_response", "changes_made"],
    },
    "testpage": {
        "type": "object",
        "properties": {
            "can_generate": {"type": "boolean", "description": "True if a meaningful test page can be generated"},
            "html_content": {"type": "string", "description": "Complete self-contained HTML test page"},
            "reason": {"type": "string", "description": "What the page demonstrates, or why it cannot be generated"},
        },
        "required": ["can_generate", "html_content", "reason"],
    },
}

# A bare object holding any of these keys is taken as a direct answer
MARKER_KEYS: dict[str, frozenset[str]] = {
    "classify": frozenset({"ai_detected_str"}),
    "customize": frozenset({"final_response"}),
    "suggest": frozenset({"suggested_response_id"}),
    "generate": frozenset({"response_text"}),
    "refine": frozenset({"refined_response"}),
    "testpage": frozenset({"can_generate"}),
}


def schema_text(task: str) -> str:
    return json.dumps(SCHEMAS[task])
