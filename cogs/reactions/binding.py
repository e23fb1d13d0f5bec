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
import functools
from typing import Any, Mapping, Optional, Tuple, Type

import discord
from emoji import is_emoji
from typing_extensions import Self

from utils.types import ReactionRolePayload

__all__: Tuple[str, ...] = ('ReactionEmoji', 'ReactionEmojiKind', 'ReactionRoleBinding')

_SNOWFLAKE_LIMIT = 1 << 64


class ReactionEmojiKind(enum.Enum):
    """
    The kind of emoji used as a reaction marker.

    standard: A unicode emoji, or any literal text Discord may accept as one.
    custom: A guild emoji, referenced by name and id.
    """

    standard = 'standard'
    custom = 'custom'


@dataclasses.dataclass(frozen=True)
class ReactionEmoji:
    """Represents a reaction marker.

    Attributes
    ----------
    kind: :class:`ReactionEmojiKind`
        Whether this is a standard or custom emoji.
    name: :class:`str`
        The unicode text for a standard emoji, the emoji name for a custom one.
        This is what reactions are compared against.
    id: Optional[:class:`int`]
        The id of a custom emoji.
    animated: :class:`bool`
        Whether a custom emoji is animated.
    """

    kind: ReactionEmojiKind
    name: str
    id: Optional[int] = None
    animated: bool = False

    @classmethod
    def standard(cls: Type[Self], text: str, /) -> Self:
        return cls(kind=ReactionEmojiKind.standard, name=text)

    @classmethod
    def parse(cls: Type[Self], value: str, /) -> Self:
        """Parse operator input into a reaction marker.

        A recognised unicode emoji is used as is. Otherwise the value is parsed as
        Discord custom emoji syntax (``<:name:id>``, ``<a:name:id>`` or ``name:id``).
        Anything else falls back to the raw text as a literal standard emoji.

        Parameters
        ----------
        value: :class:`str`
            The text the operator typed.

        Returns
        -------
        :class:`ReactionEmoji`
        """
        value = value.strip()
        if is_emoji(value):
            return cls.standard(value)

        partial = discord.PartialEmoji.from_str(value)
        if partial.id is not None and partial.name:
            return cls(kind=ReactionEmojiKind.custom, name=partial.name, id=partial.id, animated=partial.animated)

        return cls.standard(value)

    @classmethod
    def from_partial_emoji(cls: Type[Self], partial: discord.PartialEmoji, /) -> Optional[Self]:
        """Convert the emoji of a reaction event. Returns ``None`` for a custom
        emoji with no name, which can never match a marker.
        """
        if not partial.name:
            return None

        if partial.is_unicode_emoji():
            return cls.standard(partial.name)

        return cls(kind=ReactionEmojiKind.custom, name=partial.name, id=partial.id, animated=partial.animated)

    def to_partial_emoji(self) -> discord.PartialEmoji:
        return discord.PartialEmoji(name=self.name, id=self.id, animated=self.animated)

    def __str__(self) -> str:
        return str(self.to_partial_emoji())


def _validate_snowflake(data: Mapping[str, Any], key: str) -> int:
    value = data[key]

    # bool is an int subclass, reject it explicitly
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f'{key} must be an integer, got {type(value).__name__}')

    if not 0 <= value < _SNOWFLAKE_LIMIT:
        raise ValueError(f'{key} is out of range: {value}')

    return value


@dataclasses.dataclass(frozen=True)
class ReactionRoleBinding:
    """Links a single message and emoji to a role. Members reacting to the message
    with the emoji receive the role, and lose it when they remove their reaction.

    Parameters
    ----------
    channel_id: :class:`int`
        The channel the message was posted in. Informational only.
    message_id: :class:`int`
        The message carrying the reaction marker.
    role_id: :class:`int`
        The role granted or revoked.
    emoji: :class:`str`
        The reaction marker as the operator typed it.
    """

    channel_id: int
    message_id: int
    role_id: int
    emoji: str

    @functools.cached_property
    def marker(self) -> ReactionEmoji:
        """:class:`ReactionEmoji`: The parsed reaction marker."""
        return ReactionEmoji.parse(self.emoji)

    def matches(self, message_id: int, emoji: discord.PartialEmoji) -> bool:
        """Check whether a reaction on the given message with the given emoji belongs
        to this binding.

        Parameters
        ----------
        message_id: :class:`int`
            The message that was reacted to.
        emoji: :class:`discord.PartialEmoji`
            The emoji of the reaction.

        Returns
        -------
        :class:`bool`
        """
        if message_id != self.message_id:
            return False

        reaction = ReactionEmoji.from_partial_emoji(emoji)
        if reaction is None:
            return False

        return reaction.name == self.marker.name

    def to_dict(self) -> ReactionRolePayload:
        return {
            'channel_id': self.channel_id,
            'message_id': self.message_id,
            'role_id': self.role_id,
            'emoji': self.emoji,
        }

    @classmethod
    def from_dict(cls: Type[Self], data: Mapping[str, Any]) -> Self:
        """Build a binding from its persisted payload.

        Raises
        ------
        KeyError
            A field is missing.
        TypeError
            A field has the wrong type.
        ValueError
            An id is out of range or the emoji is empty.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f'Expected a mapping, got {type(data).__name__}')

        emoji = data['emoji']
        if not isinstance(emoji, str):
            raise TypeError(f'emoji must be a string, got {type(emoji).__name__}')
        if not emoji.strip():
            raise ValueError('emoji must not be empty')

        return cls(
            channel_id=_validate_snowflake(data, 'channel_id'),
            message_id=_validate_snowflake(data, 'message_id'),
            role_id=_validate_snowflake(data, 'role_id'),
            emoji=emoji,
        )
