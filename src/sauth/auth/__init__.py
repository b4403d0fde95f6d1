# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication helpers.

This package provides:
- Credential store parsed from a "username,password" per line string
- Signed session cookies (itsdangerous)
"""
