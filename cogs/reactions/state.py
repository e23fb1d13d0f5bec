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

import logging
from typing import Optional, Tuple

from utils.locks import ReadWriteLock

from .binding import ReactionRoleBinding

__all__: Tuple[str, ...] = ('BindingState',)

_log = logging.getLogger(__name__)


class BindingState:
    """Holds the current reaction role binding for the whole process.

    Any number of reaction events may read the binding at once, a replacement
    waits for them and swaps the value in one step.

    Parameters
    ----------
    initial: Optional[:class:`ReactionRoleBinding`]
        The binding loaded at startup, if any.
    """

    __slots__: Tuple[str, ...] = ('_binding', '_lock')

    def __init__(self, initial: Optional[ReactionRoleBinding] = None) -> None:
        self._binding: Optional[ReactionRoleBinding] = initial
        self._lock: ReadWriteLock = ReadWriteLock()

    async def get(self) -> Optional[ReactionRoleBinding]:
        """|coro|

        Get the current binding.

        Returns
        -------
        Optional[:class:`ReactionRoleBinding`]
            The binding, or ``None`` when none has been created yet.
        """
        async with self._lock.read():
            return self._binding

    async def replace(self, binding: ReactionRoleBinding) -> Optional[ReactionRoleBinding]:
        """|coro|

        Replace the current binding outright.

        Parameters
        ----------
        binding: :class:`ReactionRoleBinding`
            The new binding.

        Returns
        -------
        Optional[:class:`ReactionRoleBinding`]
            The binding that was replaced, if any.
        """
        async with self._lock.write():
            previous, self._binding = self._binding, binding

        _log.info(
            'Reaction role binding is now message %s (previously %s).',
            binding.message_id,
            previous and previous.message_id,
        )
        return previous
