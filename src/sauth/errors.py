# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations


class SauthError(Exception):
    pass


class InvalidConfiguration(SauthError, ValueError):
    """No usable credential could be parsed from the configuration string."""
