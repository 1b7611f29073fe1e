"""Run the Claude CLI as a one-shot subprocess and collect its structured answer."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from triage_wizard.agent.extractor import extract_structured_output
from triage_wizard.core.exceptions import (
    AgentExitError,
    AgentTimeoutError,
    AgentTransportError,
    AgentUnavailable,
    CallerInputError,
)

log = logging.getLogger("agent.runner")


@dataclass(frozen=True)
class InvocationRequest:
    prompt: str
    schema: str  # JSON Schema document, as text
    model: str

    def validate(self) -> None:
        for name in ("prompt", "schema", "model"):
            if not getattr(self, name).strip():
                raise CallerInputError(f"Missing {name} for agent invocation")

    def argv(self, binary: str) -> list[str]:
        return [
            binary,
            "-p",
            "--output-format",
            "json",
            "--model",
            self.model,
            "--json-schema",
            self.schema,
        ]


async def _feed_stdin(proc: asyncio.subprocess.Process, data: bytes) -> OSError | None:
    """Write the prompt and close stdin.

    An agent that exits early closes the pipe on us; the pipe error is returned
    rather than raised so the exit status can decide the outcome.
    """
    try:
        proc.stdin.write(data)
        await proc.stdin.drain()
    except (BrokenPipeError, ConnectionResetError) as e:
        log.debug("Claude CLI stopped reading stdin: %s", e)
        return e
    finally:
        proc.stdin.close()
    return None


async def _communicate(
    proc: asyncio.subprocess.Process, data: bytes
) -> tuple[bytes, bytes, OSError | None]:
    stdin_error, stdout, stderr = await asyncio.gather(
        _feed_stdin(proc, data),
        proc.stdout.read(),
        proc.stderr.read(),
    )
    await proc.wait()
    return stdout, stderr, stdin_error


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


async def run_agent_cli(
    invocation: InvocationRequest,
    binary: str = "claude",
    timeout: float | None = None,
) -> str:
    """Spawn the agent, send the prompt on stdin and return its stdout once it exits 0.

    ``timeout`` of None waits indefinitely.
    """
    invocation.validate()
    log.info("Running Claude CLI with model: %s", invocation.model)
    log.debug("Prompt length: %s chars", len(invocation.prompt))

    try:
        proc = await asyncio.create_subprocess_exec(
            *invocation.argv(binary),
            stdin=asyncio.subprocess.PIPE,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        log.error("Failed to spawn claude CLI: %s", e)
        raise AgentUnavailable(
            "Failed to spawn claude CLI",
            details=f"Ensure '{binary}' is installed, authenticated and in PATH. Error: {e}",
        ) from e

    try:
        stdout, stderr, stdin_error = await asyncio.wait_for(
            _communicate(proc, invocation.prompt.encode("utf-8")), timeout
        )
    except asyncio.TimeoutError as e:
        await _kill(proc)
        log.error("Claude CLI timed out after %ss", timeout)
        raise AgentTimeoutError(
            "Claude CLI timed out",
            details=f"No result after {timeout}s; the process was killed.",
        ) from e
    except OSError as e:
        await _kill(proc)
        log.error("I/O with claude CLI failed: %s", e)
        raise AgentTransportError("Failed to communicate with claude CLI", details=str(e)) from e

    if proc.returncode != 0:
        stderr_text = stderr.decode("utf-8", errors="replace")
        log.error("Claude CLI failed (exit %s): %s", proc.returncode, stderr_text)
        raise AgentExitError(
            "Claude CLI execution failed",
            details=stderr_text,
            returncode=proc.returncode,
        )

    if stdin_error is not None:
        log.error("Claude CLI exited 0 without reading the whole prompt: %s", stdin_error)
        raise AgentTransportError(
            "Failed to write prompt to claude CLI stdin", details=str(stdin_error)
        ) from stdin_error

    output = stdout.decode("utf-8", errors="replace")
    log.debug("Claude CLI output: %s", output)
    return output


async def invoke_structured(
    invocation: InvocationRequest,
    marker_keys: Iterable[str] = (),
    binary: str = "claude",
    timeout: float | None = None,
) -> Any:
    """Run one invocation and return the extracted JSON answer."""
    output = await run_agent_cli(invocation, binary=binary, timeout=timeout)
    return extract_structured_output(output, marker_keys)
