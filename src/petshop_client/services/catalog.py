"""Storefront catalog lookups and list filtering."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from petshop_client.adapters.petshop_api_client import PetshopApiClient
from petshop_client.domain.catalog import (
    Pet,
    Product,
    Service,
    Slider,
    pet_from_payload,
)

ALL_PETS = "all"


class PricedEntry(Protocol):
    """Anything listed with a name, a price and an optional pet."""

    name: str
    price: float

    @property
    def pet_name(self) -> str | None: ...


EntryT = TypeVar("EntryT", bound=PricedEntry)


@dataclass
class CatalogService:
    """Read-only access to pets, products, services and sliders."""

    api_client: PetshopApiClient

    async def list_pets(self) -> list[Pet]:
        """Return every pet category."""
        rows = await self.api_client.list_resource("/pets")
        return [pet_from_payload(row) for row in rows]

    async def get_pet(self, pet_id: int) -> Pet:
        """Return one pet category."""
        return pet_from_payload(await self.api_client.get_resource(f"/pets/{pet_id}"))

    async def list_products(self) -> list[Product]:
        """Return every product."""
        rows = await self.api_client.list_resource("/products")
        return [Product.from_payload(row) for row in rows]

    async def get_product(self, product_id: int) -> Product:
        """Return one product."""
        row = await self.api_client.get_resource(f"/products/{product_id}")
        return Product.from_payload(row)

    async def list_services(self) -> list[Service]:
        """Return every bookable service."""
        rows = await self.api_client.list_resource("/services")
        return [Service.from_payload(row) for row in rows]

    async def get_service(self, service_id: int) -> Service:
        """Return one service."""
        row = await self.api_client.get_resource(f"/services/{service_id}")
        return Service.from_payload(row)

    async def list_sliders(self) -> list[Slider]:
        """Return active homepage slides in display order."""
        rows = await self.api_client.list_resource("/sliders")
        sliders = [Slider.from_payload(row) for row in rows]
        return sorted(
            (slider for slider in sliders if slider.is_active),
            key=lambda slider: slider.order,
        )


def filter_by_criteria(
    entries: Iterable[EntryT],
    query: str = "",
    pet_name: str = ALL_PETS,
    min_price: float | None = None,
    max_price: float | None = None,
) -> list[EntryT]:
    """Filter a listing by name search, pet type and inclusive price range."""
    needle = query.strip().lower()
    low = min_price if min_price is not None else 0.0
    high = max_price if max_price is not None else float("inf")
    return [
        entry
        for entry in entries
        if needle in entry.name.lower()
        and (pet_name == ALL_PETS or entry.pet_name == pet_name)
        and low <= entry.price <= high
    ]


def pet_names(entries: Sequence[PricedEntry]) -> list[str]:
    """Return the distinct pet names of a listing in first-seen order."""
    names: list[str] = []
    for entry in entries:
        name = entry.pet_name
        if name and name not in names:
            names.append(name)
    return names


def has_active_filters(
    query: str = "",
    pet_name: str = ALL_PETS,
    min_price: float | None = None,
    max_price: float | None = None,
) -> bool:
    """Return True when any listing filter narrows the results."""
    return (
        query != ""
        or pet_name != ALL_PETS
        or min_price is not None
        or max_price is not None
    )
