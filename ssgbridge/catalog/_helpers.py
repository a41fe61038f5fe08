"""Building blocks shared by the adapter definitions.

Argument builders test for *presence* of a key, never for truthiness: a
provided ``0`` or empty string is passed through, an absent key adds
nothing. Boolean switches are added only for an explicit ``True``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from ssgbridge.adapters.base import Command
from ssgbridge.adapters.schema import ToolParam

Arguments = Dict[str, Any]


# ── Parameters ────────────────────────────────────────────────────────────


def string(name: str, description: str, required: bool = False) -> ToolParam:
    return ToolParam(name=name, type="string", description=description, required=required)


def number(name: str, description: str, required: bool = False) -> ToolParam:
    return ToolParam(name=name, type="number", description=description, required=required)


def boolean(name: str, description: str, required: bool = False) -> ToolParam:
    return ToolParam(name=name, type="boolean", description=description, required=required)


# ── Value rendering ───────────────────────────────────────────────────────


def format_number(value: Any) -> str:
    """Decimal form of a number: ``8080``, ``8080.0`` -> ``"8080"``, ``1.5``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def text(value: Any) -> str:
    """Render an argument value for the command line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


# ── Argument builders ─────────────────────────────────────────────────────


def option(arguments: Arguments, key: str, flag: str) -> List[str]:
    """``[flag, value]`` when ``key`` was given."""
    if key not in arguments:
        return []
    return [flag, text(arguments[key])]


def joined_option(arguments: Arguments, key: str, prefix: str) -> List[str]:
    """``[prefix + value]`` when ``key`` was given (``--backend=make``)."""
    if key not in arguments:
        return []
    return [prefix + text(arguments[key])]


def switch(arguments: Arguments, key: str, flag: str) -> List[str]:
    """``[flag]`` when ``key`` is ``True``."""
    return [flag] if arguments.get(key) is True else []


def positional(arguments: Arguments, key: str) -> List[str]:
    """``[value]`` when ``key`` was given."""
    if key not in arguments:
        return []
    return [text(arguments[key])]


def value(arguments: Arguments, key: str, default: Any) -> str:
    """The given value for ``key``, else the documented default."""
    return text(arguments.get(key, default))


def workdir(arguments: Arguments, key: str = "path") -> Optional[str]:
    """Working directory taken from ``key``; ``None`` defers to the dispatch cwd."""
    if key not in arguments:
        return None
    return str(arguments[key])


def command(program: str, *args: str, cwd: Optional[str] = None, stdin: Optional[str] = None) -> Command:
    return Command(program=program, args=tuple(args), cwd=cwd, stdin=stdin)


# ── Embedded source literals ──────────────────────────────────────────────

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_.!]*$")


def quoted(value: Any, escape_dollar: bool = False) -> str:
    """A double-quoted string literal safe to embed in Julia or Lisp source."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    if escape_dollar:
        escaped = escaped.replace("$", "\\$")
    return f'"{escaped}"'


def identifier(value: Any, what: str = "identifier") -> str:
    """Validate a bare name spliced into source code."""
    name = str(value)
    if not _IDENTIFIER.match(name):
        raise ValueError(f"invalid {what}: {name!r}")
    return name
