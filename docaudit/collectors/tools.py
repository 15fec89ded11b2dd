# docaudit/collectors/tools.py
import glob, os
from typing import Iterable, List

from docaudit.collectors.common import run_tool
from docaudit.exceptions import CollaboratorError


def convert_markdown(src: str, out: str, pandoc: str = "pandoc") -> str:
    """Markdown -> PDF through pandoc. The PDF must exist afterwards."""
    os.makedirs(os.path.dirname(out) or ".", exist_ok=True)
    cmd = [pandoc, src, "-o", out]
    run_tool(cmd)
    if not os.path.isfile(out):
        raise CollaboratorError(cmd, 0, f"expected output missing: {out}")
    return out


def expand(patterns: Iterable[str]) -> List[str]:
    files = set()
    for pat in patterns:
        files.update(glob.glob(pat, recursive=True))
    return sorted(files)


def lint_markdown(patterns: Iterable[str], linter: str = "markdownlint") -> List[str]:
    files = expand(patterns)
    if not files:
        return []
    run_tool([linter] + files)
    return files
