# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from sauth.plugin import Registry

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def dump_middlewares(path: Path, middlewares: Mapping[str, Any]) -> None:
    """Write ``{id: middleware}`` to a YAML file.

    Each middleware provides its registry ``type`` and a ``dumps()`` dict.
    Credential strings are stored as given (plaintext).
    """
    raw = {
        "version": FORMAT_VERSION,
        "middlewares": [
            {"id": mid, "type": mw.type, "config": mw.dumps()}
            for mid, mw in middlewares.items()
        ],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(raw, sort_keys=False, allow_unicode=True), encoding="utf-8")


def load_middlewares(path: Path, registry: Registry) -> Dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{path}: invalid YAML ({e})") from e
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at top level")
    items = raw.get("middlewares") or []
    if not isinstance(items, list):
        raise ValueError(f"{path}: 'middlewares' must be a list")
    out: Dict[str, Any] = {}
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"{path}: entry {i} is not a mapping")
        mid = str(item.get("id") or f"{item.get('type')}-{i}").strip()
        out[mid] = registry.from_other(str(item.get("type") or ""), item.get("config") or {})
        logger.info("Loaded middleware %s from %s", mid, path)
    return out
