#!/usr/bin/env python3
"""Send a triage task to the backend from the command line and print the answer.

Example: python scripts/query_cli.py classify bug.json --trace
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any

import httpx

DEFAULT_URL = "http://127.0.0.1:3000"

ROUTES = {
    "classify": "classify",
    "customize": "customize",
    "suggest": "suggest-response",
    "generate": "generate",
    "refine": "refine",
    "testpage": "testpage",
}


def _trace_request(method: str, url: str, body: dict | None, trace: bool) -> None:
    if not trace:
        return
    print(f"[REQUEST] {method} {url}", flush=True)
    if body is not None:
        print("[REQUEST BODY]", flush=True)
        print(json.dumps(body, indent=2), flush=True)
    print(flush=True)


def _trace_response(status: int, headers: dict, trace: bool) -> None:
    if not trace:
        return
    print(f"[RESPONSE] {status}", flush=True)
    for k, v in list(headers.items())[:10]:
        print(f"  {k}: {v}", flush=True)
    print("---", flush=True)


def _load_json(path: str | None) -> Any:
    if not path:
        return None
    return json.loads(Path(path).read_text(encoding="utf-8"))


def build_body(args: argparse.Namespace) -> dict[str, Any]:
    body: dict[str, Any] = {"provider": args.provider, "bug": _load_json(args.bug) or {}}
    if args.model:
        body["model"] = args.model
    if args.prompt_file:
        body["prompt"] = Path(args.prompt_file).read_text(encoding="utf-8")
    canned = _load_json(args.canned)
    if args.task == "customize":
        body["cannedResponse"] = canned or {}
    elif args.task == "suggest":
        body["cannedResponses"] = canned or []
    elif args.task == "generate":
        body["options"] = {"mode": args.mode, "cannedResponses": canned or []}
    elif args.task == "refine":
        body["currentResponse"] = args.current_response or ""
        body["userInstruction"] = args.instruction or ""
    return body


def main():
    parser = argparse.ArgumentParser(description="Send a triage task to the Triage Wizard backend.")
    parser.add_argument("task", choices=sorted(ROUTES), help="Task to run")
    parser.add_argument("bug", nargs="?", help="Path to a bug JSON file")
    parser.add_argument("--url", default=DEFAULT_URL, help="Backend base URL")
    parser.add_argument("--provider", default="claude")
    parser.add_argument("--model", default=None)
    parser.add_argument("--prompt-file", default=None, help="Send this file as the pre-built prompt")
    parser.add_argument("--canned", default=None, help="Canned response JSON (object for customize, list otherwise)")
    parser.add_argument("--mode", default="response", help="Generate mode: response or next-steps")
    parser.add_argument("--current-response", default=None)
    parser.add_argument("--instruction", default=None)
    parser.add_argument("--trace", action="store_true", help="Print the URL, request body and response status")
    args = parser.parse_args()

    url = f"{args.url.rstrip('/')}/api/ai/{ROUTES[args.task]}"
    try:
        body = build_body(args)
        _trace_request("POST", url, body, args.trace)
        r = httpx.post(url, json=body, timeout=None)
        try:
            resp_body = r.json()
        except ValueError:
            resp_body = r.text
        _trace_response(r.status_code, dict(r.headers), args.trace)
    except httpx.ConnectError:
        print(f"Cannot reach backend at {args.url}. Is it running?", file=sys.stderr)
        sys.exit(1)
    except (OSError, ValueError) as e:
        print(e, file=sys.stderr)
        sys.exit(1)

    print(json.dumps(resp_body, indent=2) if isinstance(resp_body, dict) else resp_body, flush=True)
    if r.status_code != 200:
        sys.exit(1)


if __name__ == "__main__":
    main()
