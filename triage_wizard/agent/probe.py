"""Check whether the Claude CLI is installed, for /health and /status."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

log = logging.getLogger("agent.probe")


@dataclass(frozen=True)
class CliStatus:
    available: bool
    version: str


async def probe_agent_cli(binary: str = "claude", timeout: float = 10.0) -> CliStatus:
    try:
        proc = await asyncio.create_subprocess_exec(
            binary,
            "--version",
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        return CliStatus(available=False, version=f"Not found: {e}")
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        log.warning("%s --version did not answer within %ss", binary, timeout)
        return CliStatus(available=False, version="Error: version check timed out")
    if proc.returncode == 0:
        return CliStatus(available=True, version=stdout.decode("utf-8", errors="replace").strip())
    return CliStatus(available=False, version=f"Error: {stderr.decode('utf-8', errors='replace').strip()}")
