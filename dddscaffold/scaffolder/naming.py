"""Identifier normalisation for context names.

Context names arrive from the command line in whatever shape the user typed
them.  Two forms are derived: a lower-case token used for destination paths,
and a capitalised compound (``user_profile`` -> ``UserProfile``) used for type
names inside rendered templates.
"""

from __future__ import annotations

import re
from typing import NamedTuple

_SEPARATORS = re.compile(r"[_\- ]")


class NormalizedName(NamedTuple):
    """Both derived forms of a raw identifier."""

    lower: str
    pascal: str


def pascal_case(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``.

    Empty segments are dropped, so separator-only input yields ``""``.
    """
    segments = [segment for segment in _SEPARATORS.split(value.strip()) if segment]
    return "".join(segment[:1].upper() + segment[1:].lower() for segment in segments)


def normalize(raw: str) -> NormalizedName:
    """Return the lower-case and PascalCase forms of *raw*.

    Examples::

        normalize(" User_Profile ") -> NormalizedName("user_profile", "UserProfile")
        normalize("--") -> NormalizedName("--", "")
    """
    return NormalizedName(lower=raw.strip().lower(), pascal=pascal_case(raw))


def split_list(csv: str) -> list[str]:
    """Turn a comma-delimited argument into a list of context names.

    Tokens are trimmed and lower-cased; empty tokens are dropped.  Order and
    duplicates are preserved.
    """
    if not csv.strip():
        return []
    tokens = (token.strip().lower() for token in csv.split(","))
    return [token for token in tokens if token]
