"""Interaction utilities."""

from forgecord.utils.permissions import Perms

__all__ = ["Perms"]
