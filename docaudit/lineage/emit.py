# docaudit/lineage/emit.py
import platform, socket


def snapshot() -> dict:
    # ps_version keeps the report key stable; it carries the interpreter version
    return {
        "os": f"{platform.system()} {platform.release()}".strip(),
        "ps_version": platform.python_version(),
        "hostname": socket.gethostname(),
    }
