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

import json
import logging
import os
import pathlib
import tempfile
from typing import Optional, Tuple, Union

from .binding import ReactionRoleBinding

__all__: Tuple[str, ...] = ('ReactionRoleStore',)

_log = logging.getLogger(__name__)


class ReactionRoleStore:
    """Loads and saves the reaction role binding to a single JSON file.

    The store holds no reference to the live binding, every call round-trips
    by value. It assumes it is the only writer of its file.

    Parameters
    ----------
    path: Union[:class:`str`, :class:`pathlib.Path`]
        The file to read from and write to.

    Attributes
    ----------
    path: :class:`pathlib.Path`
        The file to read from and write to.
    """

    __slots__: Tuple[str, ...] = ('path',)

    def __init__(self, path: Union[str, pathlib.Path]) -> None:
        self.path: pathlib.Path = pathlib.Path(path)

    def __repr__(self) -> str:
        return f'<ReactionRoleStore path={str(self.path)!r}>'

    def load(self) -> Optional[ReactionRoleBinding]:
        """Read the binding from disk.

        A missing, unreadable or malformed file is treated as no binding.

        Returns
        -------
        Optional[:class:`ReactionRoleBinding`]
            The persisted binding, if any.
        """
        try:
            with self.path.open('r', encoding='utf-8') as fp:
                data = json.load(fp)
        except FileNotFoundError:
            _log.debug('No reaction role file at %s.', self.path)
            return None
        except (OSError, ValueError, RecursionError) as exc:
            _log.warning('Could not read the reaction role file at %s, ignoring it.', self.path, exc_info=exc)
            return None

        try:
            binding = ReactionRoleBinding.from_dict(data)
        except (KeyError, TypeError, ValueError) as exc:
            _log.warning('Malformed reaction role file at %s, ignoring it: %s', self.path, exc)
            return None

        _log.info('Loaded reaction role binding for message %s.', binding.message_id)
        return binding

    def save(self, binding: ReactionRoleBinding) -> None:
        """Write the binding to disk, replacing whatever was there.

        The payload is written to a temporary file next to :attr:`path` and then
        renamed over it, so a failed write never leaves a half written file behind.

        Parameters
        ----------
        binding: :class:`ReactionRoleBinding`
            The binding to persist.

        Raises
        ------
        OSError
            The file could not be written.
        """
        payload = json.dumps(binding.to_dict(), indent=4, ensure_ascii=False)

        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fp:
                fp.write(payload)
                fp.write('\n')

            os.replace(temp_path, self.path)
        except BaseException:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass

            raise

        _log.debug('Saved reaction role binding for message %s to %s.', binding.message_id, self.path)
