from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv


def get_env(name: str) -> Optional[str]:
    """Load .env and return env var (None when unset or blank)."""
    load_dotenv()  # idempotent
    value = os.environ.get(name)
    if value is not None and value.strip() == "":
        return None
    return value


def get_env_int(name: str, default: int) -> int:
    value = get_env(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        print(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default
