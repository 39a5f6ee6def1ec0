# barbercrm/schemas.py

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel


def _utc_iso(value: datetime) -> str:
    # naive datetimes coming from the database are UTC
    return value.replace(tzinfo=None).isoformat(timespec="milliseconds") + "Z"


UtcDatetime = Annotated[datetime, PlainSerializer(_utc_iso, return_type=str)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    BARBER = "BARBER"
    ADMINBARBER = "ADMINBARBER"
    CLIENT = "CLIENT"


class AppointmentStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    completed = "completed"
    cancelled = "cancelled"


class UserPublic(CamelModel):
    id: str
    email: str
    role: UserRole
    first_name: str = ""
    last_name: str = ""


class ClientPublic(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    created_at: UtcDatetime
    updated_at: UtcDatetime


class ServicePublic(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: int
    is_active: bool


class BarberPublic(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    instagram: Optional[str] = None
    is_active: bool


class AppointmentPublic(CamelModel):
    id: str
    date: UtcDatetime
    time: str
    status: AppointmentStatus
    notes: Optional[str] = None
    client_id: str
    service_id: str
    barber_id: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
    client: ClientPublic
    service: ServicePublic
    barber: BarberPublic


class AppointmentCreate(CamelModel):
    client_id: NonEmptyStr
    service_id: NonEmptyStr
    barber_id: NonEmptyStr
    date: NonEmptyStr
    time: NonEmptyStr
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class AppointmentUpdate(CamelModel):
    # None means "leave unchanged"; empty strings are rejected
    client_id: Optional[NonEmptyStr] = None
    service_id: Optional[NonEmptyStr] = None
    barber_id: Optional[NonEmptyStr] = None
    date: Optional[NonEmptyStr] = None
    time: Optional[NonEmptyStr] = None
    status: Optional[AppointmentStatus] = None
    notes: Optional[str] = None


class PublicBookingCreate(CamelModel):
    name: NonEmptyStr
    email: EmailStr
    phone: NonEmptyStr
    date: NonEmptyStr
    time: NonEmptyStr


class PublicBookingResponse(CamelModel):
    message: str
    appointment: AppointmentPublic
    service_name: str
    barber_name: str
    client_name: str


class MessageResponse(BaseModel):
    message: str
