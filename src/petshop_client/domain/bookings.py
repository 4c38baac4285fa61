"""Booking domain models."""

from dataclasses import dataclass
from typing import Literal

from petshop_client.domain.catalog import Service
from petshop_client.domain.models import User

BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]

BOOKING_STATUSES: tuple[BookingStatus, ...] = (
    "pending",
    "confirmed",
    "completed",
    "cancelled",
)


@dataclass(frozen=True)
class Booking:
    """A service booking made by a customer."""

    id: int
    user_id: int
    service_id: int
    booking_date: str
    booking_time: str
    status: BookingStatus
    notes: str | None = None
    created_at: str | None = None
    service: Service | None = None
    user: User | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Booking":
        """Build a booking from an API payload."""
        status = payload.get("status")
        service = payload.get("service")
        user = payload.get("user")
        return cls(
            id=int(payload["id"]),
            user_id=int(payload.get("user_id") or 0),
            service_id=int(payload.get("service_id") or 0),
            booking_date=str(payload.get("booking_date", "")),
            booking_time=str(payload.get("booking_time", "")),
            status=status if status in BOOKING_STATUSES else "pending",
            notes=None if payload.get("notes") is None else str(payload["notes"]),
            created_at=(
                None if payload.get("created_at") is None else str(payload["created_at"])
            ),
            service=Service.from_payload(service) if isinstance(service, dict) else None,
            user=User.from_payload(user) if isinstance(user, dict) else None,
        )
