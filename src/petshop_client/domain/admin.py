"""Admin domain models."""

from dataclasses import dataclass

from petshop_client.domain.bookings import Booking


@dataclass(frozen=True)
class DashboardSummary:
    """Counts and recent activity for the admin dashboard."""

    pet_count: int
    product_count: int
    service_count: int
    booking_count: int
    recent_bookings: list[Booking]
