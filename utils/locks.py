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

import asyncio
import contextlib
from typing import AsyncIterator, Tuple

__all__: Tuple[str, ...] = ('ReadWriteLock',)


class ReadWriteLock:
    """An asyncio lock allowing many concurrent readers or one writer.

    .. code-block:: python3

        lock = ReadWriteLock()

        async with lock.read():
            ...

        async with lock.write():
            ...
    """

    __slots__: Tuple[str, ...] = ('_condition', '_readers', '_writing')

    def __init__(self) -> None:
        self._condition: asyncio.Condition = asyncio.Condition()
        self._readers: int = 0
        self._writing: bool = False

    @property
    def readers(self) -> int:
        """:class:`int`: The number of readers currently holding the lock."""
        return self._readers

    @property
    def writing(self) -> bool:
        """:class:`bool`: Whether a writer currently holds the lock."""
        return self._writing

    @contextlib.asynccontextmanager
    async def read(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(lambda: not self._writing)
            self._readers += 1

        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if not self._readers:
                    self._condition.notify_all()

    @contextlib.asynccontextmanager
    async def write(self) -> AsyncIterator[None]:
        async with self._condition:
            await self._condition.wait_for(lambda: not self._writing and not self._readers)
            self._writing = True

        try:
            yield
        finally:
            async with self._condition:
                self._writing = False
                self._condition.notify_all()
