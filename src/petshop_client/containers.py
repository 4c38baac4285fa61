"""Dependency container wiring for the client."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from petshop_client.adapters.json_file_store import JsonFileStore, KeyValueStore
from petshop_client.adapters.petshop_api_client import (
    HttpxPetshopApiClient,
    PetshopApiClient,
)
from petshop_client.app_logging import configure_logging
from petshop_client.config import Settings
from petshop_client.services.admin import AdminService
from petshop_client.services.auth import AuthService
from petshop_client.services.bookings import BookingService
from petshop_client.services.cart import CartService
from petshop_client.services.catalog import CatalogService


@dataclass
class AppContainer:
    """Holds the single per-process instance of each store and service."""

    settings: Settings
    api_client: PetshopApiClient
    store: KeyValueStore
    session: AuthService
    cart: CartService
    catalog: CatalogService
    bookings: BookingService
    admin: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default container with rehydrated session and cart."""
    configure_logging()
    resolved_settings = settings or Settings()
    api_client = HttpxPetshopApiClient.create(
        base_url=resolved_settings.api_base_url,
        csrf_cookie_url=resolved_settings.csrf_cookie_url,
        timeout=resolved_settings.request_timeout_seconds,
    )
    store = JsonFileStore.create(resolved_settings.storage_dir)
    return wire_container(resolved_settings, api_client, store, api_client.close)


def wire_container(
    settings: Settings,
    api_client: PetshopApiClient,
    store: KeyValueStore,
    close_resources: Callable[[], Awaitable[None]],
) -> AppContainer:
    """Wire services around an API client and store, then hydrate caches."""
    session = AuthService(api_client=api_client, store=store)
    cart = CartService(store=store)
    session.hydrate()
    cart.hydrate()
    return AppContainer(
        settings=settings,
        api_client=api_client,
        store=store,
        session=session,
        cart=cart,
        catalog=CatalogService(api_client),
        bookings=BookingService(api_client=api_client, session=session),
        admin=AdminService(api_client=api_client, session=session),
        close_resources=close_resources,
    )
