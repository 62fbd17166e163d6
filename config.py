from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict, Tuple

# Project root (parent of this file)
BASE_DIR = Path(__file__).resolve().parent


def _load_yaml() -> Dict[str, Any]:
    with open(BASE_DIR / "config.yaml", "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml()

# Quote branding
DEVELOPER: str = str(CFG["developer"])
PROJECT: str = str(CFG["project"])
TAGLINE: str = str(CFG["tagline"])
FOOTER_LINES: Tuple[str, ...] = tuple(str(line) for line in CFG.get("footer_lines") or ())
FILE_PREFIX: str = str(CFG["file_prefix"])

# Money
CURRENCY: str = str(CFG["currency"])

# Unit form defaults
DEFAULT_PRICE: float = float(CFG.get("default_price", 0))
