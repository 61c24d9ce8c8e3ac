"""Convenience launcher for the FolderView development server.

Usage:
    Windows: python start_dev.py --root D:\\Media
    Linux:   python3 start_dev.py --root ~/Pictures

Press Ctrl+C to stop. The script detects a virtual environment (repo root
or backend/) and uses it to run Uvicorn with --reload. Run from the
repository root.
"""

from __future__ import annotations

import argparse
import os
import signal
import subprocess
import sys
import time
from pathlib import Path
from typing import List, Tuple

ROOT_DIR = Path(__file__).resolve().parent
BACKEND_DIR = ROOT_DIR / "backend"

VENV_PYTHON = ".venv\\Scripts\\python.exe" if os.name == "nt" else ".venv/bin/python"

ProcessInfo = Tuple[str, subprocess.Popen]

# ANSI colors (disabled on Windows without VT support)
if os.name == "nt":
    os.system("")  # enable VT100 on Windows 10+

CYAN = "\033[36m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"


def log(level: str, msg: str) -> None:
    colors = {"info": CYAN, "start": GREEN, "stop": YELLOW, "error": RED}
    color = colors.get(level, "")
    print(f"{color}[{level}]{RESET} {msg}")


def resolve_python() -> str:
    """Find the best Python interpreter for the server."""
    for base in (ROOT_DIR, BACKEND_DIR):
        candidate = base / VENV_PYTHON
        if candidate.exists():
            return str(candidate)

    log("info", "No venv found, using system Python")
    return sys.executable


def check_dependencies(python: str) -> bool:
    """Verify critical packages are importable."""
    result = subprocess.run(
        [python, "-c", "import fastapi, uvicorn, aiofiles, pyuca, PIL"],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        log("error", "Missing dependencies. Run:")
        log("error", f"  cd {ROOT_DIR} && pip install -e '.[dev]'")
        return False
    return True


def start_process(name: str, cmd: List[str], cwd: Path) -> subprocess.Popen:
    log("start", f"{name}: {' '.join(cmd)}")
    if os.name == "nt":
        return subprocess.Popen(
            cmd, cwd=cwd, creationflags=subprocess.CREATE_NEW_PROCESS_GROUP
        )
    return subprocess.Popen(cmd, cwd=cwd, start_new_session=True)


def terminate_processes(processes: List[ProcessInfo]) -> None:
    for name, proc in processes:
        if proc.poll() is not None:
            continue
        log("stop", name)
        try:
            if os.name == "nt":
                proc.send_signal(signal.CTRL_BREAK_EVENT)
            elif hasattr(os, "killpg"):
                try:
                    os.killpg(os.getpgid(proc.pid), signal.SIGTERM)
                except ProcessLookupError:
                    pass
            else:
                proc.terminate()
            proc.wait(timeout=10)
        except subprocess.TimeoutExpired:
            proc.kill()


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run FolderView with auto-reload")
    parser.add_argument("--root", help="Folder to browse (default: FOLDERVIEW_ROOT_FOLDER or cwd)")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    processes: List[ProcessInfo] = []
    python = resolve_python()

    log("info", f"Python: {python}")
    log("info", f"Backend: {BACKEND_DIR}")

    if not check_dependencies(python):
        return 1

    if args.root:
        root = Path(args.root).expanduser().resolve()
        if not root.is_dir():
            log("error", f"Root folder does not exist: {root}")
            return 1
        os.environ["FOLDERVIEW_ROOT_FOLDER"] = str(root)
    else:
        os.environ.setdefault("FOLDERVIEW_ROOT_FOLDER", os.getcwd())

    try:
        os.environ.setdefault("FOLDERVIEW_DEBUG", "true")
        os.environ.setdefault("FOLDERVIEW_LOG_LEVEL", "INFO")

        cmd = [
            python,
            "-m",
            "uvicorn",
            "folderview.main:app",
            "--reload",
            "--host",
            args.host,
            "--port",
            str(args.port),
        ]

        proc = start_process("folderview", cmd, BACKEND_DIR)
        processes.append(("folderview", proc))

        log("info", "")
        log("info", f"  Root:    {os.environ['FOLDERVIEW_ROOT_FOLDER']}")
        log("info", f"  API:     http://localhost:{args.port}/api")
        log("info", f"  Docs:    http://localhost:{args.port}/docs")
        log("info", "")
        log("info", "Press Ctrl+C to stop")

        while True:
            for name, proc in processes:
                retcode = proc.poll()
                if retcode is not None:
                    log("info", f"{name} exited with code {retcode}")
                    return retcode or 0
            time.sleep(0.5)

    except FileNotFoundError as exc:
        log("error", str(exc))
        return 1
    except KeyboardInterrupt:
        print()
        log("info", "Ctrl+C received, shutting down...")
        return 0
    finally:
        terminate_processes(processes)


if __name__ == "__main__":
    raise SystemExit(main())
