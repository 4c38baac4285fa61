"""Catalog domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Pet:
    """A pet category that products and services belong to."""

    id: int
    name: str
    description: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class Product:
    """A product sold in the shop."""

    id: int
    pet_id: int
    name: str
    description: str
    price: float
    image_url: str | None = None
    shopee_url: str | None = None
    tokopedia_url: str | None = None
    lazada_url: str | None = None
    pet: Pet | None = None

    @property
    def pet_name(self) -> str | None:
        return self.pet.name if self.pet else None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Product":
        """Build a product from an API or cache payload."""
        return cls(
            id=int(payload["id"]),
            pet_id=int(payload.get("pet_id") or 0),
            name=str(payload.get("name", "")),
            description=str(payload.get("description") or ""),
            price=parse_price(payload.get("price")),
            image_url=_optional_str(payload.get("image_url")),
            shopee_url=_optional_str(payload.get("shopee_url")),
            tokopedia_url=_optional_str(payload.get("tokopedia_url")),
            lazada_url=_optional_str(payload.get("lazada_url")),
            pet=_pet_or_none(payload.get("pet")),
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize the product for the local cart cache."""
        return {
            "id": self.id,
            "pet_id": self.pet_id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image_url": self.image_url,
            "shopee_url": self.shopee_url,
            "tokopedia_url": self.tokopedia_url,
            "lazada_url": self.lazada_url,
            "pet": _pet_payload(self.pet),
        }


@dataclass(frozen=True)
class Service:
    """A bookable service such as grooming."""

    id: int
    pet_id: int
    name: str
    description: str
    price: float
    image_url: str | None = None
    pet: Pet | None = None

    @property
    def pet_name(self) -> str | None:
        return self.pet.name if self.pet else None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Service":
        """Build a service from an API payload."""
        return cls(
            id=int(payload["id"]),
            pet_id=int(payload.get("pet_id") or 0),
            name=str(payload.get("name", "")),
            description=str(payload.get("description") or ""),
            price=parse_price(payload.get("price")),
            image_url=_optional_str(payload.get("image_url")),
            pet=_pet_or_none(payload.get("pet")),
        )


@dataclass(frozen=True)
class Slider:
    """A homepage carousel slide."""

    id: int
    title: str
    image_url: str
    is_active: bool
    order: int
    description: str | None = None
    link_url: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "Slider":
        """Build a slider from an API payload."""
        return cls(
            id=int(payload["id"]),
            title=str(payload.get("title", "")),
            image_url=str(payload.get("image_url") or ""),
            is_active=bool(payload.get("is_active", False)),
            order=int(payload.get("order") or 0),
            description=_optional_str(payload.get("description")),
            link_url=_optional_str(payload.get("link_url")),
        )


def pet_from_payload(payload: dict[str, object]) -> Pet:
    """Build a pet from an API payload."""
    return Pet(
        id=int(payload["id"]),
        name=str(payload.get("name", "")),
        description=_optional_str(payload.get("description")),
        image_url=_optional_str(payload.get("image_url")),
    )


def parse_price(value: object) -> float:
    """Parse a price that the backend may send as a decimal string."""
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str) and value.strip():
        return float(value)
    return 0.0


def _pet_or_none(value: object) -> Pet | None:
    return pet_from_payload(value) if isinstance(value, dict) else None


def _pet_payload(pet: Pet | None) -> dict[str, object] | None:
    if pet is None:
        return None
    return {
        "id": pet.id,
        "name": pet.name,
        "description": pet.description,
        "image_url": pet.image_url,
    }


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
