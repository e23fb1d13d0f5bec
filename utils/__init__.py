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

import os
from typing import Iterable, List, Tuple

from .cog import *
from .config import *
from .error_handler import *
from .errors import *
from .locks import *
from .types import *

__all__: Tuple[str, ...] = ('RUNNING_DEVELOPMENT', 'parse_initial_extensions')


def _parse_environ_boolean(key: str, *, false_if_none: bool = False) -> bool:
    val = os.environ.get(key)
    if val is None:
        if false_if_none:
            return False

        return True

    return val.lower() in ("true", "1")


RUNNING_DEVELOPMENT: bool = _parse_environ_boolean('RUN_DEVELOPMENT', false_if_none=True)

IGNORE_EXTENSIONS: List[str] = [e.strip() for e in os.environ.get('IGNORE_EXTENSIONS', '').split(',') if e.strip()]


def parse_initial_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
    """Filter the extensions to load at startup.

    When running development, extensions listed in ``IGNORE_EXTENSIONS`` (comma separated,
    usually set in the ``.env`` file) are skipped.
    """
    if RUNNING_DEVELOPMENT:
        return tuple(ext for ext in extensions if ext not in IGNORE_EXTENSIONS)

    return tuple(extensions)
