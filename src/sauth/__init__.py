# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""sauth: HTTP Basic Auth gate with signed session cookies."""

__version__ = "0.1.0"
