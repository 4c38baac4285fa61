"""Client-side form schemas checked before any network call."""

import re
from datetime import date
from typing import TypeVar

import pydantic
from pydantic import BaseModel, Field, ValidationInfo, field_validator

from petshop_client.errors import ValidationError

WHATSAPP_PATTERN = r"^08\d{8,11}$"
WHATSAPP_MESSAGE = "WhatsApp number must start with 08 and be 10-13 digits"
PASSWORD_MIN_LENGTH = 6

FormT = TypeVar("FormT", bound=BaseModel)
_URL_ADAPTER = pydantic.TypeAdapter(pydantic.HttpUrl)


class LoginForm(BaseModel):
    """Credentials submitted on the login screen."""

    whatsapp_number: str
    password: str

    @field_validator("whatsapp_number")
    @classmethod
    def _check_whatsapp(cls, value: str) -> str:
        return _whatsapp_number(value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError("Password must be at least 6 characters")
        return value


class RegisterForm(BaseModel):
    """Fields submitted on the registration screen."""

    name: str
    whatsapp_number: str
    password: str
    password_confirmation: str

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value.strip()) < 2:  # noqa: PLR2004
            raise ValueError("Name must be at least 2 characters")
        return value.strip()

    @field_validator("whatsapp_number")
    @classmethod
    def _check_whatsapp(cls, value: str) -> str:
        return _whatsapp_number(value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError("Password must be at least 6 characters")
        return value

    @field_validator("password_confirmation")
    @classmethod
    def _check_confirmation(cls, value: str, info: ValidationInfo) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError("Password confirmation is required")
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value


class BookingForm(BaseModel):
    """Fields submitted when booking a service."""

    booking_date: date
    booking_time: str
    notes: str | None = None

    @field_validator("booking_date")
    @classmethod
    def _check_date(cls, value: date) -> date:
        if value < date.today():  # noqa: DTZ011
            raise ValueError("Booking date cannot be in the past")
        return value

    @field_validator("booking_time")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Booking time is required")
        return value.strip()

    @field_validator("notes")
    @classmethod
    def _blank_notes(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value


class PetForm(BaseModel):
    """Admin form for a pet category."""

    name: str = Field(min_length=1)
    description: str | None = None


class ProductForm(BaseModel):
    """Admin form for a product."""

    pet_id: int
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    shopee_url: str | None = None
    tokopedia_url: str | None = None
    lazada_url: str | None = None


class ServiceForm(BaseModel):
    """Admin form for a service."""

    pet_id: int
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)


class SliderForm(BaseModel):
    """Admin form for a homepage slide."""

    title: str = Field(min_length=1)
    description: str | None = None
    link_url: str | None = None
    is_active: bool = True
    order: int

    @field_validator("link_url")
    @classmethod
    def _check_link(cls, value: str | None) -> str | None:
        if value is None or value == "":
            return None
        try:
            _URL_ADAPTER.validate_python(value)
        except pydantic.ValidationError as exc:
            raise ValueError("Must be a valid URL") from exc
        return value


_FIELD_MESSAGES = {
    "missing": "This field is required",
    "string_too_short": "This field is required",
}
_REQUIRED_MESSAGES = {"whatsapp_number": "WhatsApp number is required"}


def validate_form(model: type[FormT], data: BaseModel | dict[str, object]) -> FormT:
    """Validate raw form data, raising a typed error with one message per field."""
    if isinstance(data, model):
        return data
    raw = data.model_dump() if isinstance(data, BaseModel) else data
    try:
        return model.model_validate(raw)
    except pydantic.ValidationError as exc:
        raise ValidationError(field_errors=_field_errors(exc)) from exc


def _field_errors(exc: pydantic.ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "__root__"
        if field in errors:
            continue
        errors[field] = _message(field, error)
    return errors


def _message(field: str, error: dict[str, object]) -> str:
    if error["type"] == "missing" and field in _REQUIRED_MESSAGES:
        return _REQUIRED_MESSAGES[field]
    if error["type"] == "value_error":
        ctx = error.get("ctx")
        if isinstance(ctx, dict) and ctx.get("error") is not None:
            return str(ctx["error"])
    return _FIELD_MESSAGES.get(str(error["type"]), str(error["msg"]))


def _whatsapp_number(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("WhatsApp number is required")
    if not re.fullmatch(WHATSAPP_PATTERN, cleaned):
        raise ValueError(WHATSAPP_MESSAGE)
    return cleaned


def form_payload(form: BaseModel) -> dict[str, object]:
    """Serialize a validated form for the API, dropping unset optionals."""
    return form.model_dump(mode="json", exclude_none=True)
