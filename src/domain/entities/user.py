"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for an account that owns exactly one profile."""

    username: str
    password_hash: str = field(repr=False)
    id: UUID = field(default_factory=uuid4)
    email: str | None = None
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
