"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from petshop_client.adapters.json_file_store import KeyValueStore
from petshop_client.adapters.petshop_api_client import ImageUpload, PetshopApiClient
from petshop_client.config import Settings
from petshop_client.containers import AppContainer, wire_container
from petshop_client.domain.catalog import Product
from petshop_client.errors import PetshopError
from petshop_client.services.auth import AuthService
from petshop_client.services.cart import CartService


def user_payload(role: str = "user", user_id: int = 1) -> dict[str, object]:
    return {
        "id": user_id,
        "name": "Budi",
        "whatsapp_number": "081234567890",
        "role": role,
        "created_at": "2024-01-01T00:00:00.000000Z",
    }


def make_product(product_id: int = 1, price: float = 50000, pet: str = "Cat") -> Product:
    return Product.from_payload(
        {
            "id": product_id,
            "pet_id": 1,
            "name": f"Product {product_id}",
            "description": "Tasty",
            "price": price,
            "pet": {"id": 1, "name": pet},
        }
    )


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-memory durable store for tests."""

    values: dict[str, object] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        return self.values.get(key)

    def set(self, key: str, value: object) -> None:
        self.values[key] = value

    def delete(self, key: str) -> None:
        self.values.pop(key, None)


class ReadOnlyKeyValueStore(InMemoryKeyValueStore):
    """Store whose writes fail like a full or read-only disk."""

    def set(self, key: str, value: object) -> None:
        raise OSError(28, "No space left on device")

    def delete(self, key: str) -> None:
        raise OSError(30, "Read-only file system")


@dataclass
class FakePetshopApiClient(PetshopApiClient):
    """Fake backend that records calls and returns canned payloads."""

    user: dict[str, object] = field(default_factory=user_payload)
    current_user: dict[str, object] | None = None
    login_error: PetshopError | None = None
    register_error: PetshopError | None = None
    logout_error: PetshopError | None = None
    current_user_error: PetshopError | None = None
    resources: dict[str, list[dict[str, object]]] = field(default_factory=dict)
    entities: dict[str, dict[str, object]] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    payloads: list[tuple[str, str, object]] = field(default_factory=list)

    async def get_csrf_cookie(self) -> None:
        self.calls.append(("GET", "/sanctum/csrf-cookie"))

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        self.calls.append(("POST", "/register"))
        self.payloads.append(("POST", "/register", payload))
        if self.register_error is not None:
            raise self.register_error
        return self.user

    async def login(self, payload: dict[str, object]) -> dict[str, object]:
        self.calls.append(("POST", "/login"))
        self.payloads.append(("POST", "/login", payload))
        await asyncio.sleep(0)
        if self.login_error is not None:
            raise self.login_error
        return self.user

    async def logout(self) -> None:
        self.calls.append(("POST", "/logout"))
        if self.logout_error is not None:
            raise self.logout_error

    async def get_current_user(self) -> dict[str, object]:
        self.calls.append(("GET", "/user"))
        await asyncio.sleep(0)
        if self.current_user_error is not None:
            raise self.current_user_error
        return self.current_user if self.current_user is not None else self.user

    async def list_resource(self, path: str) -> list[dict[str, object]]:
        self.calls.append(("GET", path))
        return self.resources.get(path, [])

    async def get_resource(self, path: str) -> dict[str, object]:
        self.calls.append(("GET", path))
        return self.entities[path]

    async def create_booking(self, payload: dict[str, object]) -> dict[str, object]:
        self.calls.append(("POST", "/bookings"))
        self.payloads.append(("POST", "/bookings", payload))
        return {"id": 10, "user_id": 1, "status": "pending", **payload}

    async def send_json(
        self, method: str, path: str, payload: dict[str, object]
    ) -> dict[str, object]:
        self.calls.append((method, path))
        self.payloads.append((method, path, payload))
        return {"id": 5, **payload, **self.entities.get(path, {})}

    async def send_multipart(
        self,
        path: str,
        fields: dict[str, str],
        image: ImageUpload | None = None,
    ) -> dict[str, object]:
        self.calls.append(("POST", path))
        self.payloads.append(("POST", path, {"fields": fields, "image": image}))
        return {"id": 7, **fields}

    async def delete(self, path: str) -> None:
        self.calls.append(("DELETE", path))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        api_base_url="https://petshop.test/api",
        storage_dir=str(tmp_path / "storage"),
    )


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def api_client() -> FakePetshopApiClient:
    return FakePetshopApiClient()


@pytest.fixture
def auth_service(
    api_client: FakePetshopApiClient, store: InMemoryKeyValueStore
) -> AuthService:
    return AuthService(api_client=api_client, store=store)


@pytest.fixture
def cart_service(store: InMemoryKeyValueStore) -> CartService:
    return CartService(store=store)


@pytest.fixture
def container(
    settings: Settings,
    api_client: FakePetshopApiClient,
    store: InMemoryKeyValueStore,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return wire_container(settings, api_client, store, close_resources)
