# docaudit/collectors/common.py
from __future__ import annotations
import json, logging, os, shutil, subprocess
from datetime import datetime, timezone
from typing import Any, List, Optional

from docaudit.exceptions import CollaboratorError

logger = logging.getLogger(__name__)


def write_json(path: str, obj: Any):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2)
        f.write("\n")


def utc_now(now: Optional[datetime] = None) -> datetime:
    return (now or datetime.now(timezone.utc)).astimezone(timezone.utc)


def iso(now: Optional[datetime] = None) -> str:
    return utc_now(now).strftime("%Y-%m-%dT%H:%M:%SZ")


def compact(now: Optional[datetime] = None) -> str:
    return utc_now(now).strftime("%Y%m%dT%H%M%SZ")


def unique_path(directory: str, stem: str, suffix: str) -> str:
    """directory/stem+suffix, with -2, -3 ... appended instead of overwriting."""
    path = os.path.join(directory, stem + suffix)
    n = 2
    while os.path.exists(path):
        path = os.path.join(directory, f"{stem}-{n}{suffix}")
        n += 1
    return path


def run_tool(cmd: List[str], cwd: Optional[str] = None) -> str:
    """Run an external tool once. Missing binary or non-zero exit raises CollaboratorError."""
    if shutil.which(cmd[0]) is None and not os.path.isfile(cmd[0]):
        raise CollaboratorError(cmd)
    logger.info("running %s", " ".join(cmd))
    proc = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
    output = (proc.stdout or "") + (proc.stderr or "")
    if proc.returncode != 0:
        raise CollaboratorError(cmd, proc.returncode, output)
    return output
