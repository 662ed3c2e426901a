"""Parse ``/name arg ...`` console input."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from typing import List, Optional

PREFIX = "/"


@dataclass
class CLICommand:
    name: str
    args: List[str] = field(default_factory=list)


def _tokens(body: str) -> List[str]:
    try:
        return shlex.split(body)
    except ValueError:
        # unbalanced quote
        return body.split()


def parse_command(text: str) -> Optional[CLICommand]:
    """Return the command in ``text``, or ``None`` if it is not one.

    Arguments may be quoted; the command name is case-insensitive.
    """

    text = text.strip()
    if not text.startswith(PREFIX):
        return None
    tokens = _tokens(text[len(PREFIX):])
    if not tokens:
        return None
    name, *args = tokens
    return CLICommand(name=name.lower(), args=args)


__all__ = ["CLICommand", "PREFIX", "parse_command"]
