# docaudit/evidence/hashing.py
import hashlib, os

SIDECAR_SUFFIX = ".sha256"


def sha256_file(path: str) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def write_sidecar(path: str) -> str:
    """Write `<path>.sha256` in sha256sum format and return its path."""
    digest = sha256_file(path)
    sidecar = path + SIDECAR_SUFFIX
    with open(sidecar, "w", encoding="utf-8") as f:
        f.write(f"{digest}  {os.path.basename(path)}\n")
    return sidecar


def read_sidecar(sidecar: str) -> str:
    with open(sidecar, "r", encoding="utf-8") as f:
        first = f.readline().strip()
    if not first:
        raise ValueError(f"empty checksum file: {sidecar}")
    return first.split()[0].lower()


def verify_sidecar(path: str) -> bool:
    return read_sidecar(path + SIDECAR_SUFFIX) == sha256_file(path)
