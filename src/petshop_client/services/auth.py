"""Session lifecycle against the remote auth API."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from petshop_client.adapters.json_file_store import KeyValueStore
from petshop_client.adapters.petshop_api_client import PetshopApiClient
from petshop_client.domain.models import SessionState, User
from petshop_client.errors import (
    AuthenticationRequired,
    Forbidden,
    PetshopError,
    UnexpectedResponse,
)
from petshop_client.forms import LoginForm, RegisterForm, validate_form

AUTH_STORAGE_KEY = "auth-storage"
_STORAGE_VERSION = 0

_logger = logging.getLogger(__name__)

SessionListener = Callable[[SessionState], None]


@dataclass
class AuthService:
    """Single source of truth for who is logged in.

    Login, register, logout and the startup check share one lock, so
    overlapping calls finish one at a time and the last successful call
    decides the user. Only ``user`` is persisted. Everything else is derived
    from it or re-established by ``check_auth`` in each process.
    """

    api_client: PetshopApiClient
    store: KeyValueStore
    _user: User | None = field(default=None, init=False)
    _initialized: bool = field(default=False, init=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False)
    _listeners: list[SessionListener] = field(default_factory=list, init=False)

    @property
    def state(self) -> SessionState:
        """Return an immutable snapshot of the session."""
        return SessionState(user=self._user, initialized=self._initialized)

    @property
    def user(self) -> User | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    @property
    def is_admin(self) -> bool:
        return self.state.is_admin

    @property
    def initialized(self) -> bool:
        return self._initialized

    def hydrate(self) -> None:
        """Restore the cached user as a provisional identity."""
        cached = self.store.get(AUTH_STORAGE_KEY)
        payload = _cached_user_payload(cached)
        if payload is None:
            return
        try:
            user = User.from_payload(payload)
        except (KeyError, TypeError, ValueError):
            _logger.warning("Ignoring malformed cached user")
            self.store.delete(AUTH_STORAGE_KEY)
            return
        self._user = user
        self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener for session changes and return an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def login(self, data: LoginForm | dict[str, object]) -> SessionState:
        """Log in with a WhatsApp number and password."""
        form = validate_form(LoginForm, data)
        async with self._lock:
            await self.api_client.get_csrf_cookie()
            payload = await self.api_client.login(form.model_dump())
            user = _user_from_response(payload)
            self.set_user(user)
            _logger.info("Logged in: user_id=%s role=%s", user.id, user.role)
            return self.state

    async def register(self, data: RegisterForm | dict[str, object]) -> SessionState:
        """Create an account and start a session for it."""
        form = validate_form(RegisterForm, data)
        async with self._lock:
            await self.api_client.get_csrf_cookie()
            payload = await self.api_client.register(form.model_dump())
            user = _user_from_response(payload)
            self.set_user(user)
            _logger.info("Registered: user_id=%s", user.id)
            return self.state

    async def logout(self) -> None:
        """End the session; local state is cleared even if the server call fails."""
        async with self._lock:
            try:
                await self.api_client.logout()
            except PetshopError:
                _logger.exception("Logout request failed; clearing local session")
            finally:
                self.set_user(None)

    async def check_auth(self) -> None:
        """Confirm or refute the cached identity once per process."""
        if self._initialized:
            return
        async with self._lock:
            if self._initialized:
                return
            try:
                payload = await self.api_client.get_current_user()
                user = User.from_payload(payload)
            except (PetshopError, KeyError, TypeError, ValueError) as exc:
                _logger.info("No active session: %s", exc)
                user = None
            self._initialized = True
            self.set_user(user)

    async def require_access(self, admin_only: bool = False) -> User:
        """Return the verified user or raise if the route is off-limits."""
        await self.check_auth()
        if self._user is None:
            raise AuthenticationRequired()
        if admin_only and not self._user.is_admin:
            raise Forbidden()
        return self._user

    def set_user(self, user: User | None) -> None:
        """Replace the user; derived flags follow automatically.

        The durable cache is best-effort: a failed write is logged and the
        in-memory session still changes and listeners are still notified.
        """
        self._user = user
        try:
            self._persist()
        except OSError:
            _logger.exception("Could not update the cached session")
        self._notify()

    def _persist(self) -> None:
        if self._user is None:
            self.store.delete(AUTH_STORAGE_KEY)
            return
        self.store.set(
            AUTH_STORAGE_KEY,
            {"state": {"user": self._user.to_payload()}, "version": _STORAGE_VERSION},
        )

    def _notify(self) -> None:
        snapshot = self.state
        for listener in list(self._listeners):
            listener(snapshot)


def _user_from_response(payload: object) -> User:
    if not isinstance(payload, dict):
        raise UnexpectedResponse(details={"body": payload})
    try:
        return User.from_payload(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise UnexpectedResponse(details=payload) from exc


def _cached_user_payload(cached: object) -> dict[str, object] | None:
    if not isinstance(cached, dict):
        return None
    state = cached.get("state")
    if not isinstance(state, dict):
        return None
    user = state.get("user")
    return user if isinstance(user, dict) else None

