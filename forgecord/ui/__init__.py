"""
UI layer: views, embed presets and display formatters.
"""

from forgecord.ui.embeds import EmbedColors, EmbedPresets
from forgecord.ui.formatters import Mention, Strings, Timestamp, format_duration
from forgecord.ui.views import (
    ConfirmationConfig,
    ConfirmationManager,
    ConfirmationView,
    ForgeView,
    Paginator,
    PaginatorConfig,
    PaginatorLabels,
)

__all__ = [
    "EmbedColors",
    "EmbedPresets",
    "Mention",
    "Strings",
    "Timestamp",
    "format_duration",
    "ForgeView",
    "Paginator",
    "PaginatorConfig",
    "PaginatorLabels",
    "ConfirmationManager",
    "ConfirmationConfig",
    "ConfirmationView",
]
