from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from .config import ScenarioConfig
from .patterns import AccessPattern


def load_access_pattern(path: str | Path) -> AccessPattern:
    """Load a scenario file holding either ``accesses`` or per-kind ``counts``.

    The scenario name defaults to the file stem.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(path))

    suffix = p.suffix.lower()
    raw: dict[str, Any]
    if suffix in {".yaml", ".yml"}:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    elif suffix == ".json":
        raw = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported pattern format: {p.suffix} (expected .json/.yaml/.yml)")

    try:
        if "counts" in raw:
            scenario = ScenarioConfig.model_validate({"name": p.stem, **raw})
        else:
            scenario = ScenarioConfig(name=raw.get("name") or p.stem, pattern=AccessPattern.model_validate(raw))
        return scenario.to_pattern()
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Invalid access pattern: {p}") from exc
