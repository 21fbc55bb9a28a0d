"""
Message polls: creation with validation, early expiry and voter listing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Union

from forgecord.core.exceptions import ErrorCode, InvalidFormBodyError, RestError
from forgecord.managers.base import RestManager

MAX_ANSWERS = 10
MIN_DURATION_HOURS = 1
MAX_DURATION_HOURS = 168


@dataclass(frozen=True)
class PollAnswer:
    text: str
    emoji_id: Optional[int] = None
    emoji_name: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        media: Dict[str, Any] = {"text": self.text}
        if self.emoji_id is not None:
            media["emoji"] = {"id": self.emoji_id}
        elif self.emoji_name:
            media["emoji"] = {"name": self.emoji_name}
        return {"poll_media": media}


class PollManager(RestManager):
    """
    Usage:
        >>> polls = PollManager(bot)
        >>> await polls.create(
        ...     channel.id,
        ...     question="Best language?",
        ...     answers=["Python", PollAnswer("Rust", emoji_name="🦀")],
        ...     duration=24,
        ... )
    """

    async def create(
        self,
        channel_id: int,
        *,
        question: str,
        answers: Sequence[Union[str, PollAnswer]],
        duration: int = 24,
        allow_multiselect: bool = False,
        layout_type: int = 1,
        content: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send a message carrying a poll.

        Args:
            duration: Hours the poll stays open, 1..168

        Raises:
            InvalidFormBodyError: missing question or no answers
            RestError: POLL_TOO_MANY_ANSWERS or POLL_INVALID_DURATION
        """
        if not question:
            raise InvalidFormBodyError(extra="question is required")
        if not answers:
            raise InvalidFormBodyError(extra="at least one answer is required")
        if len(answers) > MAX_ANSWERS:
            raise RestError(ErrorCode.POLL_TOO_MANY_ANSWERS, details={"answers": len(answers)})
        if not MIN_DURATION_HOURS <= duration <= MAX_DURATION_HOURS:
            raise RestError(ErrorCode.POLL_INVALID_DURATION, details={"duration": duration})

        normalized = [a if isinstance(a, PollAnswer) else PollAnswer(a) for a in answers]
        body = self._compact(
            {
                "content": content,
                "poll": {
                    "question": {"text": question},
                    "answers": [answer.to_payload() for answer in normalized],
                    "duration": duration,
                    "allow_multiselect": allow_multiselect,
                    "layout_type": layout_type,
                },
            }
        )
        message = await self._rest.request(
            "POST", "/channels/{channel_id}/messages", channel_id=channel_id, json=body
        )
        self.log.info(
            "Poll created",
            extra={"channel_id": channel_id, "answers": len(normalized), "duration": duration},
        )
        return message

    async def expire(self, channel_id: int, message_id: int) -> Dict[str, Any]:
        """End a poll immediately."""
        return await self._rest.request(
            "POST",
            "/channels/{channel_id}/polls/{message_id}/expire",
            channel_id=channel_id,
            message_id=message_id,
        )

    async def get_answer_voters(
        self,
        channel_id: int,
        message_id: int,
        answer_id: int,
        *,
        after: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._rest.request(
            "GET",
            "/channels/{channel_id}/polls/{message_id}/answers/{answer_id}",
            channel_id=channel_id,
            message_id=message_id,
            answer_id=answer_id,
            params={"after": after, "limit": limit},
        )
