# docaudit/evidence/attest.py
from typing import Optional
from docaudit.collectors.common import run_tool


def sign_file(path: str, key_id: Optional[str] = None, gpg: str = "gpg") -> str:
    """Detached ASCII-armored signature next to the file; returns the .asc path."""
    sig = path + ".asc"
    cmd = [gpg, "--batch", "--yes", "--armor", "--detach-sign", "--output", sig]
    if key_id:
        cmd += ["--local-user", key_id]
    run_tool(cmd + [path])
    return sig


def verify_signature(path: str, signature: Optional[str] = None, gpg: str = "gpg") -> str:
    """Raises CollaboratorError when gpg rejects the signature; returns gpg's output."""
    return run_tool([gpg, "--batch", "--verify", signature or path + ".asc", path])
