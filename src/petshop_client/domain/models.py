"""Identity and session domain models."""

from dataclasses import dataclass
from typing import Literal

Role = Literal["admin", "user"]

ROLE_ADMIN: Role = "admin"
ROLE_USER: Role = "user"


@dataclass(frozen=True)
class User:
    """Identity record returned by the auth API."""

    id: int
    name: str
    whatsapp_number: str
    role: Role
    whatsapp_verified_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_admin(self) -> bool:
        """Return True when the identity carries the admin role."""
        return self.role == ROLE_ADMIN

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "User":
        """Build a user from an API or cache payload."""
        role = payload.get("role")
        return cls(
            id=int(payload["id"]),
            name=str(payload.get("name", "")),
            whatsapp_number=str(payload.get("whatsapp_number", "")),
            role=ROLE_ADMIN if role == ROLE_ADMIN else ROLE_USER,
            whatsapp_verified_at=_optional_str(payload.get("whatsapp_verified_at")),
            created_at=_optional_str(payload.get("created_at")),
            updated_at=_optional_str(payload.get("updated_at")),
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize the user for the local cache."""
        return {
            "id": self.id,
            "name": self.name,
            "whatsapp_number": self.whatsapp_number,
            "role": self.role,
            "whatsapp_verified_at": self.whatsapp_verified_at,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class SessionState:
    """Snapshot of the client's belief about who is logged in.

    ``is_authenticated`` and ``is_admin`` are derived from ``user`` on read so
    they can never disagree with it. Before ``initialized`` is set, ``user`` is
    a provisional identity restored from the local cache.
    """

    user: User | None = None
    initialized: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def is_admin(self) -> bool:
        return self.user is not None and self.user.is_admin

    @property
    def is_provisional(self) -> bool:
        """Return True when the user has not been confirmed by the server."""
        return self.user is not None and not self.initialized


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
