from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Caller identity read from a validated JWT.

    Handed to each operation explicitly through FastAPI dependencies;
    nothing reads identity from global state.

        user_id: the token's `sub`
        roles: platform roles, e.g. "teacher"
    """

    user_id: str
    roles: frozenset[str]

    def has_role(self, role: str) -> bool:
        return role in self.roles
