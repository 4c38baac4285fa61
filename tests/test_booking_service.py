"""Tests for customer bookings."""

import asyncio
from datetime import date, timedelta

import pytest

from petshop_client.domain.bookings import Booking
from petshop_client.errors import (
    AuthenticationRequired,
    InvalidCredentials,
    ValidationError,
)
from petshop_client.services.auth import AuthService
from petshop_client.services.bookings import (
    BookingService,
    count_by_status,
    filter_by_status,
    recent,
)
from tests.conftest import FakePetshopApiClient


def _booking(booking_id: int, status: str) -> Booking:
    return Booking.from_payload(
        {
            "id": booking_id,
            "user_id": 1,
            "service_id": 2,
            "booking_date": "2030-01-01",
            "booking_time": "10:00:00",
            "status": status,
        }
    )


def test_create_booking_posts_validated_payload(
    auth_service: AuthService, api_client: FakePetshopApiClient
) -> None:
    service = BookingService(api_client=api_client, session=auth_service)
    tomorrow = (date.today() + timedelta(days=1)).isoformat()

    booking = asyncio.run(
        service.create_booking(
            3, {"booking_date": tomorrow, "booking_time": "10:00", "notes": "Gentle"}
        )
    )

    assert booking.status == "pending"
    assert api_client.payloads[-1][2] == {
        "service_id": 3,
        "booking_date": tomorrow,
        "booking_time": "10:00",
        "notes": "Gentle",
    }


def test_create_booking_requires_login(
    auth_service: AuthService, api_client: FakePetshopApiClient
) -> None:
    api_client.current_user_error = InvalidCredentials()
    service = BookingService(api_client=api_client, session=auth_service)

    with pytest.raises(AuthenticationRequired, match="book this service"):
        asyncio.run(
            service.create_booking(
                3, {"booking_date": date.today().isoformat(), "booking_time": "10:00"}
            )
        )

    assert ("POST", "/bookings") not in api_client.calls


def test_invalid_booking_form_makes_no_calls(
    auth_service: AuthService, api_client: FakePetshopApiClient
) -> None:
    service = BookingService(api_client=api_client, session=auth_service)

    with pytest.raises(ValidationError):
        asyncio.run(service.create_booking(3, {"booking_date": "", "booking_time": ""}))

    assert api_client.calls == []


def test_list_bookings_after_access_check(
    auth_service: AuthService, api_client: FakePetshopApiClient
) -> None:
    api_client.resources["/bookings"] = [
        {
            "id": 1,
            "user_id": 1,
            "service_id": 2,
            "booking_date": "2030-01-01",
            "booking_time": "10:00:00",
            "status": "confirmed",
            "service": {"id": 2, "pet_id": 1, "name": "Bath", "price": "50000.00"},
        }
    ]
    service = BookingService(api_client=api_client, session=auth_service)

    bookings = asyncio.run(service.list_bookings())

    assert api_client.calls[0] == ("GET", "/user")
    assert bookings[0].service is not None
    assert bookings[0].service.price == 50000.0


def test_status_helpers() -> None:
    bookings = [_booking(1, "pending"), _booking(2, "confirmed"), _booking(3, "pending")]

    assert [b.id for b in filter_by_status(bookings, "pending")] == [1, 3]
    assert filter_by_status(bookings, "all") == bookings
    assert count_by_status(bookings) == {
        "pending": 2,
        "confirmed": 1,
        "completed": 0,
        "cancelled": 0,
    }
    assert recent(bookings, limit=2) == bookings[:2]
