# barbercrm/models.py

from typing import Optional, List
from datetime import datetime, timezone
from uuid import uuid4

from sqlmodel import SQLModel, Field, Relationship


def new_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    # stored instants are naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    role: str  # ADMIN, BARBER, ADMINBARBER or CLIENT
    status: str = "ACTIVE"
    created_at: datetime = Field(default_factory=utcnow)


class Client(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    first_name: str
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = Field(default=None, index=True)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    appointments: List["Appointment"] = Relationship(back_populates="client")


class Service(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    name: str
    description: Optional[str] = None
    price: float = 0
    duration: int = 30  # minutes
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    appointments: List["Appointment"] = Relationship(back_populates="service")


class Barber(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)
    first_name: str
    last_name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    instagram: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    appointments: List["Appointment"] = Relationship(back_populates="barber")


class Appointment(SQLModel, table=True):
    id: str = Field(default_factory=new_id, primary_key=True)

    # local midnight of the business day, as a naive UTC instant
    date: datetime = Field(index=True)
    time: str  # HH:MM
    status: str = "pending"
    notes: Optional[str] = None

    client_id: str = Field(foreign_key="client.id", index=True)
    service_id: str = Field(foreign_key="service.id")
    barber_id: str = Field(foreign_key="barber.id", index=True)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    client: Optional[Client] = Relationship(back_populates="appointments")
    service: Optional[Service] = Relationship(back_populates="appointments")
    barber: Optional[Barber] = Relationship(back_populates="appointments")
