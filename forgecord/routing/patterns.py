"""
PatternMatcher: customId pattern compilation for InteractionRouter.

Supported Patterns
------------------
- Exact:    "open_ticket"            -> matches only "open_ticket"
- Glob:     "page_*"                 -> matches "page_1", "page_next", ...
- Sandwich: "role_*_toggle"          -> matches "role_admin_toggle", ...
- Regex:    re.compile(r"^ban_(?P<user_id>\\d+)$") -> named groups become params

Parameter Rules
---------------
- Named groups populate the parameter mapping directly.
- ``wildcard`` is filled from the first unnamed capture group, unless a
  group is literally named ``wildcard``. Every ``*`` in a glob is an unnamed
  group, so globs always expose their first capture as ``wildcard``; all
  captures are available positionally in ``RouteMatch.groups``.
- Each ``*`` matches one or more characters (greedy). "a_*_b" does not
  match "a__b".
- Matching is case-sensitive. Regex patterns are applied with ``search``;
  anchoring is the caller's responsibility.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from forgecord.core.exceptions import InvalidPatternError

RoutePattern = Union[str, re.Pattern[str]]

WILDCARD_KEY = "wildcard"


class PatternKind(Enum):
    EXACT = "exact"
    GLOB = "glob"
    REGEX = "regex"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    params: Dict[str, str] = field(default_factory=dict)
    groups: Tuple[Optional[str], ...] = ()


@dataclass(frozen=True, slots=True)
class PatternMatcher:
    """
    Compiled form of one route pattern.

    Examples
    --------
    >>> PatternMatcher.compile("page_*").match("page_3").params
    {'wildcard': '3'}
    >>> PatternMatcher.compile("open_ticket").match("open_ticket_2") is None
    True
    """

    kind: PatternKind
    source: RoutePattern
    regex: Optional[re.Pattern[str]] = None

    @classmethod
    def compile(cls, pattern: object) -> "PatternMatcher":
        if isinstance(pattern, re.Pattern):
            return cls(PatternKind.REGEX, pattern, pattern)

        if not isinstance(pattern, str):
            raise InvalidPatternError(
                extra=f"got {type(pattern).__name__}",
                details={"pattern_type": type(pattern).__name__},
            )

        if "*" not in pattern:
            return cls(PatternKind.EXACT, pattern)

        escaped = "(.+)".join(re.escape(part) for part in pattern.split("*"))
        return cls(PatternKind.GLOB, pattern, re.compile(escaped))

    def match(self, custom_id: str) -> Optional[RouteMatch]:
        if self.kind is PatternKind.EXACT:
            return RouteMatch() if custom_id == self.source else None

        assert self.regex is not None
        if self.kind is PatternKind.GLOB:
            found = self.regex.fullmatch(custom_id)
        else:
            found = self.regex.search(custom_id)

        if found is None:
            return None

        params = {name: value for name, value in found.groupdict().items() if value is not None}

        if WILDCARD_KEY not in self.regex.groupindex:
            named_positions = set(self.regex.groupindex.values())
            for position in range(1, self.regex.groups + 1):
                if position in named_positions:
                    continue
                value = found.group(position)
                if value is not None:
                    params[WILDCARD_KEY] = value
                break

        return RouteMatch(params=params, groups=found.groups())
