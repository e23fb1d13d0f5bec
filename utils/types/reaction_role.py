from __future__ import annotations

from typing import TypedDict


class ReactionRolePayload(TypedDict):
    channel_id: int
    message_id: int
    role_id: int
    emoji: str
