# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sauth.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

MASK = "********"


@dataclass(frozen=True)
class CredentialEntry:
    username: str
    password: str


def _parse_entry(entry: str) -> Optional[CredentialEntry]:
    fields = entry.split(",")
    if len(fields) != 2:
        return None
    username, password = fields
    if not username or not password:
        return None
    return CredentialEntry(username=username, password=password)


@dataclass(frozen=True)
class CredentialStore:
    """Immutable, ordered list of accepted username/password pairs.

    Built once from the raw configuration string, e.g.::

        "foo,bar\\nusername,password\\nus3r,p@ssw0rd1"

    Usernames are not required to be unique; the first matching pair wins.
    """

    raw: str
    entries: Tuple[CredentialEntry, ...]

    @classmethod
    def parse(cls, raw: str) -> "CredentialStore":
        entries = []
        for lineno, entry in enumerate((raw or "").split("\n"), start=1):
            parsed = _parse_entry(entry)
            if parsed is None:
                # never log the entry itself, it may carry a password
                username = entry.split(",", 1)[0] if "," in entry else ""
                logger.warning(
                    "Ignoring malformed credential entry at line %d (username=%r)",
                    lineno,
                    username,
                )
                continue
            entries.append(parsed)
        if not entries:
            raise InvalidConfiguration("No valid credential was provided")
        return cls(raw=raw, entries=tuple(entries))

    def lookup(self, username: str, password: str) -> bool:
        # Plain equality, no constant-time guarantee.
        for e in self.entries:
            if e.username == username and e.password == password:
                return True
        return False

    def describe(self) -> str:
        return "".join(f"username={e.username}, pass={MASK}\n" for e in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        users = ", ".join(e.username for e in self.entries)
        return f"CredentialStore(users=[{users}])"


def is_authorized(store: CredentialStore, username: str, password: str) -> bool:
    return store.lookup(username, password)
