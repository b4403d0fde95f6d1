# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
sauth.logger
~~~~~~~~~~~~
Human-readable *or* JSON-lines logs on stderr.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

_ISO = "%Y-%m-%dT%H:%M:%SZ"
_PLAIN = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class _JSONFormatter(logging.Formatter):
    def format(self, record):  # type: ignore[override]
        d = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(_ISO),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            d["exc"] = self.formatException(record.exc_info)
        return json.dumps(d, separators=(",", ":"))


def setup_logging(level: str = "INFO", json_logs: bool = False) -> logging.Logger:
    root = logging.getLogger("sauth")
    root.setLevel(level.upper())
    root.propagate = False
    for h in list(root.handlers):
        root.removeHandler(h)

    h = logging.StreamHandler()
    h.setFormatter(_JSONFormatter() if json_logs else logging.Formatter(_PLAIN))
    root.addHandler(h)
    return root
