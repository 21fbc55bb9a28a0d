"""
REST endpoint managers for Discord features discord.py has no models for.
"""

from forgecord.managers.base import RestManager
from forgecord.managers.monetization import MonetizationManager
from forgecord.managers.onboarding import OnboardingManager
from forgecord.managers.polls import PollAnswer, PollManager
from forgecord.managers.soundboard import SoundboardManager
from forgecord.managers.super_reactions import SuperReactionsManager
from forgecord.managers.voice_effects import VoiceEffectsManager

__all__ = [
    "RestManager",
    "SoundboardManager",
    "PollManager",
    "PollAnswer",
    "MonetizationManager",
    "OnboardingManager",
    "VoiceEffectsManager",
    "SuperReactionsManager",
]
