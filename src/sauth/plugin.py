# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Registration contract used by hosts that assemble middleware chains.

A host learns how to build the gate from three entry points:

- ``from_other``: rebuild from a serialized or previous instance
- ``from_cli``: build from a parsed click context
- ``cli_options``: the click options the host adds to its own command
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

import click

from sauth.middleware import TYPE, AuthMiddleware, AuthMiddlewareConfig

CREDENTIALS_HELP = 'List of auth key pairs in CSV format, e.g. "foo,bar\\nusername,password\\nus3r,p@ssw0rd1"'


@dataclass(frozen=True)
class MiddlewareSpec:
    type: str
    from_other: Callable[[Any], Any]
    from_cli: Callable[[click.Context], Any]
    cli_options: Callable[[], List[click.Parameter]]


def from_other(other: Any) -> AuthMiddleware:
    """Recreate the gate configuration from a previous instance or its serialized form.

    Accepts an ``AuthMiddleware``, an ``AuthMiddlewareConfig``, a mapping such
    as ``{"credentials": "user,pass"}`` or the same mapping as a JSON string.
    The credential string is parsed again, so invalid input still raises.
    """
    if isinstance(other, AuthMiddleware):
        return AuthMiddleware.new(other.credentials)
    if isinstance(other, AuthMiddlewareConfig):
        cfg = other
    elif isinstance(other, (str, bytes)):
        cfg = AuthMiddlewareConfig.model_validate_json(other)
    elif isinstance(other, Mapping):
        cfg = AuthMiddlewareConfig.model_validate(dict(other))
    else:
        raise ValueError(f"Cannot build {TYPE} middleware from {type(other).__name__}")
    return AuthMiddleware.new(cfg.credentials)


def from_cli(ctx: click.Context) -> AuthMiddleware:
    return AuthMiddleware.new(ctx.params.get("credentials") or "")


def cli_options() -> List[click.Parameter]:
    return [
        click.Option(["--credentials", "-c"], default=None, help=CREDENTIALS_HELP),
    ]


def get_spec() -> MiddlewareSpec:
    return MiddlewareSpec(
        type=TYPE,
        from_other=from_other,
        from_cli=from_cli,
        cli_options=cli_options,
    )


class Registry:
    """Middleware specs keyed by type name."""

    def __init__(self) -> None:
        self._specs: Dict[str, MiddlewareSpec] = {}

    def add_spec(self, spec: MiddlewareSpec) -> None:
        if not isinstance(spec, MiddlewareSpec):
            raise ValueError("Expected a MiddlewareSpec")
        if not spec.type or not isinstance(spec.type, str):
            raise ValueError("Middleware type must be a non-empty string")
        for name in ("from_other", "from_cli", "cli_options"):
            if not callable(getattr(spec, name)):
                raise ValueError(f"Middleware '{spec.type}': {name} is not callable")
        for opt in spec.cli_options():
            if not isinstance(opt, click.Parameter):
                raise ValueError(f"Middleware '{spec.type}': cli_options must return click parameters")
        if spec.type in self._specs:
            raise ValueError(f"Middleware '{spec.type}' is already registered")
        self._specs[spec.type] = spec

    def get(self, type_name: str) -> Optional[MiddlewareSpec]:
        return self._specs.get(type_name)

    def types(self) -> List[str]:
        return sorted(self._specs)

    def from_other(self, type_name: str, data: Any) -> Any:
        spec = self.get(type_name)
        if spec is None:
            known = ", ".join(self.types()) or "none"
            raise ValueError(f"Unknown middleware type '{type_name}' (known: {known})")
        return spec.from_other(data)


def default_registry() -> Registry:
    reg = Registry()
    reg.add_spec(get_spec())
    return reg
