#!/usr/bin/env python3
"""
Startup script: free the backend port, start the Triage Wizard backend and open the app in a browser.
Optional: --no-kill, --background, --no-open. NO_OPEN in the environment also skips the browser.
"""
import argparse
import signal
import subprocess
import sys
import time
import webbrowser
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import httpx

from triage_wizard.core.config.loader import load_settings
from triage_wizard.core.exceptions import ConfigError

PID_FILE = ROOT / "scripts" / ".startup_pids"

processes = []


def get_pids_on_port(port: int) -> list[int]:
    """Return list of PIDs listening on the given port (macOS/Linux)."""
    try:
        result = subprocess.run(
            ["lsof", "-ti", f":{port}"],
            cwd=str(ROOT),
            capture_output=True,
            text=True,
            timeout=5,
        )
        out = (result.stdout or "").strip()
        if result.returncode != 0 or not out:
            return []
        return [int(x) for x in out.split() if x.strip().isdigit()]
    except (FileNotFoundError, ValueError, subprocess.TimeoutExpired):
        return []


def kill_port(port: int) -> bool:
    """Kill processes listening on port. Returns False if a kill failed."""
    pids = get_pids_on_port(port)
    for pid in pids:
        try:
            subprocess.run(["kill", "-9", str(pid)], check=True, timeout=5)
            print(f"  Killed PID {pid} on port {port}")
        except subprocess.CalledProcessError as e:
            print(f"  Warning: failed to kill PID {pid} on port {port}: {e}", file=sys.stderr)
            return False
    if pids:
        time.sleep(2)
    return True


def wait_for_health(url: str, timeout: int = 30) -> bool:
    start = time.time()
    while time.time() - start < timeout:
        try:
            r = httpx.get(f"{url}/health", timeout=15)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(0.5)
    return False


def cleanup(sig=None, frame=None):
    for p in processes:
        try:
            p.terminate()
            p.wait(timeout=5)
        except subprocess.TimeoutExpired:
            p.kill()
    if PID_FILE.exists():
        PID_FILE.unlink()
    sys.exit(0)


def main():
    parser = argparse.ArgumentParser(description="Free the backend port, start the backend and open the app.")
    parser.add_argument("--env-file", default=".env", help="Env file, relative to the project root")
    parser.add_argument("--no-kill", action="store_true", help="Do not kill processes on the port; only start")
    parser.add_argument("--background", action="store_true", help="Run in background; write PID to scripts/.startup_pids")
    parser.add_argument("--no-open", action="store_true", help="Do not open a browser")
    args = parser.parse_args()

    try:
        settings = load_settings(args.env_file, project_root=ROOT)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not args.no_kill:
        print(f"Freeing port {settings.port}...")
        kill_port(settings.port)

    proc = subprocess.Popen(
        [sys.executable, "-m", "triage_wizard.gateway.main"],
        cwd=str(ROOT),
        stdout=subprocess.DEVNULL if args.background else None,
        stderr=subprocess.PIPE if args.background else None,
    )
    processes.append(proc)
    url = settings.get_base_url("localhost")
    print(f"Backend started on {url} (PID {proc.pid})")

    if not wait_for_health(url):
        print(f"Warning: backend did not report healthy at {url}/health", file=sys.stderr)
    elif not (args.no_open or settings.no_open):
        print(f"Opening browser at {url}")
        if not webbrowser.open(url):
            print(f"Failed to open browser. Open {url} manually.", file=sys.stderr)

    if args.background:
        PID_FILE.parent.mkdir(parents=True, exist_ok=True)
        PID_FILE.write_text(str(proc.pid))
        print(f"Running in background. PID saved to {PID_FILE}")
        return

    signal.signal(signal.SIGINT, cleanup)
    signal.signal(signal.SIGTERM, cleanup)
    print("Running. Press Ctrl+C to stop.")
    while True:
        time.sleep(1)
        if proc.poll() is not None:
            print(f"Process {proc.pid} exited.")
            cleanup()


if __name__ == "__main__":
    main()
