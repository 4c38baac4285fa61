"""Admin console operations, gated on a verified admin session."""

import asyncio
import logging
from dataclasses import dataclass

from pydantic import BaseModel

from petshop_client.adapters.petshop_api_client import ImageUpload, PetshopApiClient
from petshop_client.domain.admin import DashboardSummary
from petshop_client.domain.bookings import BOOKING_STATUSES, Booking
from petshop_client.domain.catalog import (
    Pet,
    Product,
    Service,
    Slider,
    pet_from_payload,
)
from petshop_client.errors import ValidationError
from petshop_client.forms import (
    PetForm,
    ProductForm,
    ServiceForm,
    SliderForm,
    form_payload,
    validate_form,
)
from petshop_client.services.auth import AuthService
from petshop_client.services.bookings import recent

_logger = logging.getLogger(__name__)


@dataclass
class AdminService:
    """CRUD for catalog entities and booking management."""

    api_client: PetshopApiClient
    session: AuthService

    async def dashboard(self) -> DashboardSummary:
        """Load every admin listing concurrently and summarize it."""
        await self._require_admin()
        pets, products, services, bookings = await asyncio.gather(
            self.api_client.list_resource("/admin/pets"),
            self.api_client.list_resource("/admin/products"),
            self.api_client.list_resource("/admin/services"),
            self.api_client.list_resource("/admin/bookings"),
        )
        parsed_bookings = [Booking.from_payload(row) for row in bookings]
        return DashboardSummary(
            pet_count=len(pets),
            product_count=len(products),
            service_count=len(services),
            booking_count=len(parsed_bookings),
            recent_bookings=recent(parsed_bookings),
        )

    async def list_pets(self) -> list[Pet]:
        """Return every pet category."""
        await self._require_admin()
        rows = await self.api_client.list_resource("/admin/pets")
        return [pet_from_payload(row) for row in rows]

    async def save_pet(
        self,
        data: PetForm | dict[str, object],
        pet_id: int | None = None,
        image: ImageUpload | None = None,
    ) -> Pet:
        """Create a pet, or update it when ``pet_id`` is given."""
        form = validate_form(PetForm, data)
        await self._require_admin()
        row = await self.api_client.send_multipart(
            _entity_path("/admin/pets", pet_id), _multipart_fields(form), image
        )
        return pet_from_payload(row)

    async def delete_pet(self, pet_id: int) -> None:
        """Delete a pet category."""
        await self._require_admin()
        await self.api_client.delete(f"/admin/pets/{pet_id}")

    async def list_products(self) -> list[Product]:
        """Return every product."""
        await self._require_admin()
        rows = await self.api_client.list_resource("/admin/products")
        return [Product.from_payload(row) for row in rows]

    async def save_product(
        self,
        data: ProductForm | dict[str, object],
        product_id: int | None = None,
        image: ImageUpload | None = None,
    ) -> Product:
        """Create a product, or update it when ``product_id`` is given."""
        form = validate_form(ProductForm, data)
        await self._require_admin()
        row = await self.api_client.send_multipart(
            _entity_path("/admin/products", product_id),
            _multipart_fields(form),
            image,
        )
        return Product.from_payload(row)

    async def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        await self._require_admin()
        await self.api_client.delete(f"/admin/products/{product_id}")

    async def list_services(self) -> list[Service]:
        """Return every service."""
        await self._require_admin()
        rows = await self.api_client.list_resource("/admin/services")
        return [Service.from_payload(row) for row in rows]

    async def save_service(
        self, data: ServiceForm | dict[str, object], service_id: int | None = None
    ) -> Service:
        """Create a service, or update it with PUT when ``service_id`` is given."""
        form = validate_form(ServiceForm, data)
        await self._require_admin()
        if service_id is None:
            row = await self.api_client.send_json(
                "POST", "/admin/services", form_payload(form)
            )
        else:
            row = await self.api_client.send_json(
                "PUT", f"/admin/services/{service_id}", form_payload(form)
            )
        return Service.from_payload(row)

    async def delete_service(self, service_id: int) -> None:
        """Delete a service."""
        await self._require_admin()
        await self.api_client.delete(f"/admin/services/{service_id}")

    async def list_sliders(self) -> list[Slider]:
        """Return every slide, active or not, in display order."""
        await self._require_admin()
        rows = await self.api_client.list_resource("/admin/sliders")
        return sorted(
            (Slider.from_payload(row) for row in rows),
            key=lambda slider: slider.order,
        )

    async def save_slider(
        self,
        data: SliderForm | dict[str, object],
        slider_id: int | None = None,
        image: ImageUpload | None = None,
    ) -> Slider:
        """Create a slide, or update it when ``slider_id`` is given."""
        form = validate_form(SliderForm, data)
        await self._require_admin()
        row = await self.api_client.send_multipart(
            _entity_path("/admin/sliders", slider_id), _multipart_fields(form), image
        )
        return Slider.from_payload(row)

    async def delete_slider(self, slider_id: int) -> None:
        """Delete a slide."""
        await self._require_admin()
        await self.api_client.delete(f"/admin/sliders/{slider_id}")

    async def list_bookings(self) -> list[Booking]:
        """Return bookings from every customer."""
        await self._require_admin()
        rows = await self.api_client.list_resource("/admin/bookings")
        return [Booking.from_payload(row) for row in rows]

    async def update_booking_status(self, booking_id: int, status: str) -> Booking:
        """Move a booking to another status."""
        if status not in BOOKING_STATUSES:
            raise ValidationError(field_errors={"status": f"Unknown status: {status}"})
        await self._require_admin()
        row = await self.api_client.send_json(
            "PUT", f"/admin/bookings/{booking_id}", {"status": status}
        )
        _logger.info("Booking status updated: id=%s status=%s", booking_id, status)
        return Booking.from_payload(row)

    async def delete_booking(self, booking_id: int) -> None:
        """Delete a booking."""
        await self._require_admin()
        await self.api_client.delete(f"/admin/bookings/{booking_id}")

    async def _require_admin(self) -> None:
        await self.session.require_access(admin_only=True)


def _entity_path(collection: str, entity_id: int | None) -> str:
    return collection if entity_id is None else f"{collection}/{entity_id}"


def _multipart_fields(form: BaseModel) -> dict[str, str]:
    fields: dict[str, str] = {}
    for key, value in form_payload(form).items():
        if isinstance(value, bool):
            fields[key] = "1" if value else "0"
        else:
            fields[key] = str(value)
    return fields
