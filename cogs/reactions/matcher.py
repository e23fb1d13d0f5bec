"""
Contributor-Only License v1.0

This file is licensed under the Contributor-Only License. Usage is restricted to
non-commercial purposes. Distribution, sublicensing, and sharing of this file
are prohibited except by the original owner.

Modifications are allowed solely for contributing purposes and must not
misrepresent the original material. This license does not grant any
patent rights or trademark rights.

Full license terms are available in the LICENSE file at the root of the repository.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    import discord

    from .binding import ReactionRoleBinding

__all__: Tuple[str, ...] = ('RoleAction', 'RoleIntent', 'resolve_role_intent')


class RoleAction(enum.Enum):
    """
    What to do with the bound role.

    grant: The member added the marker reaction.
    revoke: The member removed the marker reaction.
    """

    grant = 'grant'
    revoke = 'revoke'

    @classmethod
    def from_event_type(cls, event_type: str) -> RoleAction:
        return cls.grant if event_type == 'REACTION_ADD' else cls.revoke


@dataclasses.dataclass(frozen=True)
class RoleIntent:
    """A role change resolved from a matching reaction event."""

    action: RoleAction
    guild_id: int
    user_id: int
    role_id: int


def resolve_role_intent(
    binding: Optional[ReactionRoleBinding], payload: discord.RawReactionActionEvent
) -> Optional[RoleIntent]:
    """Decide whether a raw reaction event belongs to the binding.

    Parameters
    ----------
    binding: Optional[:class:`ReactionRoleBinding`]
        The current binding, if any.
    payload: :class:`discord.RawReactionActionEvent`
        The reaction event.

    Returns
    -------
    Optional[:class:`RoleIntent`]
        The role change to perform, or ``None`` if the event is not relevant.
    """
    if binding is None:
        return None

    if not binding.matches(payload.message_id, payload.emoji):
        return None

    # Role changes only mean something inside a guild
    if not payload.guild_id or not payload.user_id:
        return None

    return RoleIntent(
        action=RoleAction.from_event_type(payload.event_type),
        guild_id=payload.guild_id,
        user_id=payload.user_id,
        role_id=binding.role_id,
    )
