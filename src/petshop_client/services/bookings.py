"""Customer bookings for shop services."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from petshop_client.adapters.petshop_api_client import PetshopApiClient
from petshop_client.domain.bookings import BOOKING_STATUSES, Booking, BookingStatus
from petshop_client.errors import AuthenticationRequired
from petshop_client.forms import BookingForm, form_payload, validate_form
from petshop_client.services.auth import AuthService

ALL_STATUSES = "all"

_logger = logging.getLogger(__name__)


@dataclass
class BookingService:
    """Lists and creates bookings for the logged-in customer."""

    api_client: PetshopApiClient
    session: AuthService

    async def list_bookings(self) -> list[Booking]:
        """Return the current user's bookings."""
        await self.session.require_access()
        rows = await self.api_client.list_resource("/bookings")
        return [Booking.from_payload(row) for row in rows]

    async def create_booking(
        self, service_id: int, data: BookingForm | dict[str, object]
    ) -> Booking:
        """Validate the form, then book the service for the current user."""
        form = validate_form(BookingForm, data)
        await self.session.check_auth()
        if not self.session.is_authenticated:
            raise AuthenticationRequired("Please login to book this service")
        payload = {"service_id": service_id, **form_payload(form)}
        booking = Booking.from_payload(await self.api_client.create_booking(payload))
        _logger.info("Booking created: id=%s service_id=%s", booking.id, service_id)
        return booking


def filter_by_status(bookings: Iterable[Booking], status: str) -> list[Booking]:
    """Return bookings with a status, or all of them for ``"all"``."""
    if status == ALL_STATUSES:
        return list(bookings)
    return [booking for booking in bookings if booking.status == status]


def count_by_status(bookings: Iterable[Booking]) -> dict[BookingStatus, int]:
    """Count bookings per status, including statuses with none."""
    counts: dict[BookingStatus, int] = dict.fromkeys(BOOKING_STATUSES, 0)
    for booking in bookings:
        counts[booking.status] += 1
    return counts


def recent(bookings: list[Booking], limit: int = 5) -> list[Booking]:
    """Return the first bookings as listed by the API, newest first."""
    return bookings[:limit]
