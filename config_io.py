from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict


def load_json_config(path: Path) -> Dict[str, Any]:
    """Read the Rescue Bot config (``window``, ``render`` and ``game`` sections).

    Only the JSON syntax and the top-level shape are checked here; every
    section and value is optional and is defaulted and clamped later by
    ``config_parsing``.

    Raises:
        FileNotFoundError: The config file is missing.
        SystemExit: The file is not JSON, or not a JSON object. The message
            points at the offending line and column for the player to fix.
    """
    if not path.is_file():
        raise FileNotFoundError(f"Rescue Bot config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        msg = (
            f"\n{path}:{e.lineno}:{e.colno}: config is not valid JSON ({e.msg}).\n"
            f"Expected an object with optional \"window\", \"render\" and \"game\" sections.\n"
        )
        raise SystemExit(msg)
    if not isinstance(data, dict):
        raise SystemExit(f"\n{path}: config must be a JSON object, got {type(data).__name__}.\n")
    return data
