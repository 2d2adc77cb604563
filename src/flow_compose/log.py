"""Timestamped output + GitHub Actions annotations."""

import os
import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def step(msg: str) -> None:
    info(f"  {msg}")


def warning(msg: str) -> None:
    if _is_github_actions():
        print(f"::warning::{msg}", flush=True)
    print(f"[{_timestamp()}] WARNING: {msg}", file=sys.stderr, flush=True)


def error(msg: str) -> None:
    if _is_github_actions():
        print(f"::error::{msg}", flush=True)
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)
