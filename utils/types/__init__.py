from __future__ import annotations

from typing import Tuple

from .reaction_role import ReactionRolePayload

__all__: Tuple[str, ...] = ('ReactionRolePayload',)
