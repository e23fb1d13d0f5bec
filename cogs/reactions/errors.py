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

from typing import Tuple

from utils.errors import ApplicationCommandException

__all__: Tuple[str, ...] = (
    'ReactionRoleException',
    'MessagePostFailed',
    'ReactionAttachFailed',
    'BindingPersistFailed',
)


class ReactionRoleException(ApplicationCommandException):
    """The base exception all reaction role creation failures inherit from."""


class MessagePostFailed(ReactionRoleException):
    """Exception raised when the reaction role message could not be posted."""

    def __init__(self, *, channel_id: int) -> None:
        super().__init__(f'I could not post the reaction role message in <#{channel_id}>. Nothing was changed.')
        self.channel_id: int = channel_id


class ReactionAttachFailed(ReactionRoleException):
    """Exception raised when the reaction marker could not be added to the posted message.
    The message stays posted.
    """

    def __init__(self, *, emoji: str, message_id: int) -> None:
        super().__init__(
            f'I posted the message but could not react to it with {emoji}. '
            'Is that a valid emoji I have access to? The message was left in place, '
            'and the previous reaction role is still active.'
        )
        self.emoji: str = emoji
        self.message_id: int = message_id


class BindingPersistFailed(ReactionRoleException):
    """Exception raised when the new binding could not be saved. The previous binding
    stays active.
    """

    def __init__(self, *, message_id: int) -> None:
        super().__init__(
            'I posted and reacted to the message but could not save the reaction role. '
            'The previous reaction role is still active.'
        )
        self.message_id: int = message_id
