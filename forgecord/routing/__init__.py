"""customId routing for component and modal interactions."""

from forgecord.routing.patterns import PatternKind, PatternMatcher, RouteMatch
from forgecord.routing.router import InteractionRouter, Route

__all__ = [
    "InteractionRouter",
    "Route",
    "PatternMatcher",
    "PatternKind",
    "RouteMatch",
]
