"""Environment readers shared by the frozen config dataclasses."""
import os


def read_env_float(name: str, default: float) -> float:
    """Read env var as float; return default if unset or invalid."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def read_env_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()
