"""A registered player: identifier, display name, and the opaque token that authorizes its actions."""

import secrets
from dataclasses import dataclass, field
from typing import Self
from uuid import UUID, uuid4


@dataclass(frozen=True)
class Player:
    name: str
    token: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def register(cls, name: str, token_bytes: int = 16) -> Self:
        return cls(name=name, token=secrets.token_urlsafe(token_bytes))

    def has_token(self, token: str | None) -> bool:
        if token is None:
            return False
        return secrets.compare_digest(self.token, token)
