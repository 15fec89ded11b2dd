# docaudit/exceptions.py
from typing import List, Optional


class DocAuditError(Exception):
    """Base class for errors raised by the compliance pipeline."""


class DirectoryNotFound(DocAuditError, FileNotFoundError):
    def __init__(self, path, role: str = "directory"):
        self.path = str(path)
        self.role = role
        super().__init__(f"{role} not found: {self.path}")


class ConfigError(DocAuditError):
    pass


class CollaboratorError(DocAuditError):
    """An external tool (pandoc, gpg, linter) was missing or exited non-zero."""

    def __init__(self, cmd: List[str], returncode: Optional[int] = None, output: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.output = output
        if returncode is None:
            msg = f"tool not available: {self.cmd[0]}"
        else:
            msg = f"{' '.join(self.cmd)} exited with {returncode}"
        if output:
            msg = f"{msg}: {output.strip()}"
        super().__init__(msg)
