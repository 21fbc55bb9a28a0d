"""
Interactive views.

- ForgeView: owner check, single terminal gate, best-effort message edits
- Paginator: button navigation over a list of pages
- ConfirmationManager / ConfirmationView: awaitable yes/no prompts
"""

from forgecord.ui.views.base import ForgeView
from forgecord.ui.views.confirmation import (
    ConfirmationConfig,
    ConfirmationManager,
    ConfirmationView,
)
from forgecord.ui.views.pagination import Paginator, PaginatorConfig, PaginatorLabels

__all__ = [
    "ForgeView",
    "Paginator",
    "PaginatorConfig",
    "PaginatorLabels",
    "ConfirmationManager",
    "ConfirmationConfig",
    "ConfirmationView",
]
