from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, RootModel, field_validator, model_validator

from .utils.time import normalize_time, parse_iso_date

MAX_GUESTS = 20

BookingStatus = Literal["pending", "confirmed", "cancelled", "completed"]


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


def _parse_date(v):
    if v is None or isinstance(v, date):
        return v
    try:
        return parse_iso_date(v)
    except (TypeError, ValueError):
        raise ValueError("Invalid date format. Use YYYY-MM-DD.")


class CreateBookingRequest(ApiModel):
    customer_name: str = Field("Guest", alias="customerName", max_length=120)
    customer_email: EmailStr = Field(..., alias="customerEmail")
    customer_phone: str | None = Field(None, alias="customerPhone", max_length=32)
    booking_date: date = Field(..., alias="date")
    time: str | None = Field(None, validate_default=True)
    guests: int = Field(1, ge=1, le=MAX_GUESTS)
    table_number: int = Field(1, alias="tableNumber", ge=1)
    status: BookingStatus = "pending"
    special_requests: str = Field("", alias="specialRequests")

    @model_validator(mode="before")
    @classmethod
    def merge_alternate_keys(cls, data):
        """The public booking form and the admin panel use different field names."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if not str(data.get("customerName") or "").strip():
            full = f"{data.get('firstName') or ''} {data.get('lastName') or ''}".strip()
            data["customerName"] = full or "Guest"
        if not data.get("customerEmail") and data.get("email"):
            data["customerEmail"] = data["email"]
        if not data.get("customerPhone") and data.get("phone"):
            data["customerPhone"] = data["phone"]
        if data.get("guests") is None and data.get("partysize") is not None:
            data["guests"] = data["partysize"]
        if data.get("guests") in (None, ""):
            data.pop("guests", None)
        if not data.get("status"):
            data.pop("status", None)
        if data.get("specialRequests") is None:
            data.pop("specialRequests", None)
        if data.get("tableNumber") in (None, ""):
            data.pop("tableNumber", None)
        return data

    @field_validator("booking_date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _parse_date(v)

    @field_validator("time", mode="after")
    @classmethod
    def validate_time(cls, v):
        return normalize_time(v)

    @field_validator("customer_email", mode="after")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

    @field_validator("customer_phone", mode="after")
    @classmethod
    def empty_phone(cls, v):
        return v or None


class UpdateBookingRequest(ApiModel):
    customer_name: str | None = Field(None, alias="customerName", min_length=1, max_length=120)
    customer_email: EmailStr | None = Field(None, alias="customerEmail")
    customer_phone: str | None = Field(None, alias="customerPhone", max_length=32)
    booking_date: date | None = Field(None, alias="date")
    time: str | None = None
    guests: int | None = Field(None, ge=1, le=MAX_GUESTS)
    table_number: int | None = Field(None, alias="tableNumber", ge=1)
    status: BookingStatus | None = None
    special_requests: str | None = Field(None, alias="specialRequests")

    @field_validator("booking_date", mode="before")
    @classmethod
    def validate_date(cls, v):
        return _parse_date(v)

    @field_validator("time", mode="after")
    @classmethod
    def validate_time(cls, v):
        return normalize_time(v) if v else v

    @field_validator("customer_email", mode="after")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v


class CustomerRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr
    phone: str | None = Field(None, max_length=32)
    visits: int = Field(1, ge=0)
    last_visit: date | None = Field(None, alias="lastVisit")

    @field_validator("last_visit", mode="before")
    @classmethod
    def validate_last_visit(cls, v):
        return _parse_date(v)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v):
        return v.lower()


class UpdateCustomerRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=120)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=32)
    visits: int | None = Field(None, ge=0)
    last_visit: date | None = Field(None, alias="lastVisit")

    @field_validator("last_visit", mode="before")
    @classmethod
    def validate_last_visit(cls, v):
        return _parse_date(v)

    @field_validator("email", mode="after")
    @classmethod
    def lower_email(cls, v):
        return v.lower() if v else v


class OperatingHours(ApiModel):
    weekdays: str | None = None
    weekends: str | None = None
    sunday: str | None = None


class UpdateSettingsRequest(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=120)
    address: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=32)
    max_party_size: int | None = Field(None, alias="maxPartySize", ge=1, le=MAX_GUESTS)
    booking_advance_days: int | None = Field(None, alias="bookingAdvanceDays", ge=0)
    table_count: int | None = Field(None, alias="tableCount", ge=1)
    operating_hours: OperatingHours | None = Field(None, alias="operatingHours")


class SlotAvailability(RootModel[dict[str, bool]]):
    pass


class SetActiveRequest(ApiModel):
    menu_title: str | None = Field(None, alias="menuTitle")
