# engine/storage.py
import json
import logging
import math
import os
import tempfile
from typing import Any, Dict

logger = logging.getLogger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def load_plans(path: str) -> Dict[str, dict]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read business plans from %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring business plan file %s: expected an object keyed by owner id", path)
        return {}
    return _sanitize_json_compat(data)


def save_plans(path: str, plans: Dict[str, dict]) -> None:
    """Write every owner's document, replacing the file in one step.

    Each call writes through its own temporary file in the target folder, so
    concurrent savers never share a half-written file.
    """
    ensure_user_data_dir(path)
    clean = _sanitize_json_compat(plans)
    folder = os.path.dirname(path) or "."
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=folder, prefix=".plans-", suffix=".tmp", delete=False
    ) as f:
        tmp_path = f.name
        try:
            json.dump(clean, f, allow_nan=False, indent=2)
        except (TypeError, ValueError):
            f.close()
            os.remove(tmp_path)
            raise
    os.replace(tmp_path, path)
