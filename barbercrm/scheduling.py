# barbercrm/scheduling.py
"""Appointment booking rules shared by the staff and public endpoints."""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from barbercrm.config import public_booking, shop_settings
from barbercrm.core import normalize_date, range_end, validate_time
from barbercrm.errors import ConfigurationError, ConflictError, NotFoundError, ValidationError
from barbercrm.models import Appointment, Barber, Client, Service, utcnow
from barbercrm.schemas import (
    AppointmentCreate,
    AppointmentStatus,
    AppointmentUpdate,
    PublicBookingCreate,
)

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = (
    ("client_id", Client, "Client"),
    ("service_id", Service, "Service"),
    ("barber_id", Barber, "Barber"),
)

# null for these means "not supplied" on update
PATCHABLE_FIELDS = ("client_id", "service_id", "barber_id", "date", "time", "status")


def with_relations(stmt):
    return stmt.options(
        selectinload(Appointment.client),
        selectinload(Appointment.service),
        selectinload(Appointment.barber),
    )


def parse_status(value: str) -> AppointmentStatus:
    try:
        return AppointmentStatus(value)
    except ValueError:
        raise ValidationError("Invalid status") from None


class AppointmentService:
    def __init__(self, session: Session):
        self.session = session

    def list_appointments(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        name: Optional[str] = None,
        phone: Optional[str] = None,
    ) -> List[Appointment]:
        stmt = select(Appointment)

        if start_date:
            stmt = stmt.where(Appointment.date >= normalize_date(start_date))
        if end_date:
            stmt = stmt.where(Appointment.date <= range_end(end_date))
        if status:
            stmt = stmt.where(Appointment.status == parse_status(status).value)

        if name or phone:
            stmt = stmt.join(Client, col(Appointment.client_id) == col(Client.id))
        if name:
            stmt = stmt.where(
                or_(
                    col(Client.first_name).icontains(name, autoescape=True),
                    col(Client.last_name).icontains(name, autoescape=True),
                )
            )
        if phone:
            stmt = stmt.where(col(Client.phone).contains(phone, autoescape=True))

        stmt = stmt.order_by(col(Appointment.date), col(Appointment.time))
        return list(self.session.exec(with_relations(stmt)).all())

    def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = self.session.exec(
            with_relations(select(Appointment).where(Appointment.id == appointment_id))
        ).first()
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    def last_completed(self) -> List[Appointment]:
        """Most recent completed appointment of every active client."""
        stmt = (
            select(Appointment)
            .join(Client, col(Appointment.client_id) == col(Client.id))
            .where(Appointment.status == AppointmentStatus.completed.value)
            .where(col(Client.is_active).is_(True))
            .order_by(col(Appointment.date).desc(), col(Appointment.time).desc())
        )

        latest = {}
        for appointment in self.session.exec(with_relations(stmt)).all():
            latest.setdefault(appointment.client_id, appointment)

        return sorted(
            latest.values(),
            key=lambda a: (a.client.first_name.lower(), a.client.last_name.lower()),
        )

    def create_appointment(self, data: AppointmentCreate) -> Appointment:
        time = validate_time(data.time)
        date = normalize_date(data.date)
        self._ensure_references(data.client_id, data.service_id, data.barber_id)

        status = data.status or AppointmentStatus.pending
        if status != AppointmentStatus.cancelled:
            self._ensure_slot_free(data.barber_id, date, time)

        appointment = Appointment(
            client_id=data.client_id,
            service_id=data.service_id,
            barber_id=data.barber_id,
            date=date,
            time=time,
            status=status.value,
            notes=data.notes,
        )
        self.session.add(appointment)
        self.session.commit()
        self.session.refresh(appointment)

        logger.info(f"Appointment {appointment.id} created for client {appointment.client_id}")
        return appointment

    def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        appointment = self.session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")

        changes = data.model_dump(exclude_unset=True)
        for field in PATCHABLE_FIELDS:
            if changes.get(field) is None:
                changes.pop(field, None)

        if "time" in changes:
            validate_time(changes["time"])
        if "date" in changes:
            changes["date"] = normalize_date(changes["date"])
        self._ensure_references(
            changes.get("client_id"),
            changes.get("service_id"),
            changes.get("barber_id"),
        )
        if "status" in changes:
            changes["status"] = AppointmentStatus(changes["status"]).value

        if changes.get("status", appointment.status) != AppointmentStatus.cancelled.value:
            self._ensure_slot_free(
                changes.get("barber_id", appointment.barber_id),
                changes.get("date", appointment.date),
                changes.get("time", appointment.time),
                exclude_id=appointment.id,
            )

        for field, value in changes.items():
            setattr(appointment, field, value)
        appointment.updated_at = utcnow()

        self.session.add(appointment)
        self.session.commit()
        self.session.refresh(appointment)

        logger.info(f"Appointment {appointment.id} updated: {sorted(changes)}")
        return appointment

    def delete_appointment(self, appointment_id: str) -> None:
        appointment = self.session.get(Appointment, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")

        self.session.delete(appointment)
        self.session.commit()
        logger.info(f"Appointment {appointment_id} deleted")

    def _ensure_references(
        self,
        client_id: Optional[str],
        service_id: Optional[str],
        barber_id: Optional[str],
    ) -> None:
        ids = {"client_id": client_id, "service_id": service_id, "barber_id": barber_id}
        for field, model, label in REFERENCE_FIELDS:
            record_id = ids[field]
            if record_id is None:
                continue
            if self.session.get(model, record_id) is None:
                logger.warning(f"{label} {record_id} not found")
                raise NotFoundError(f"{label} not found")

    def _ensure_slot_free(
        self,
        barber_id: str,
        date: datetime,
        time: str,
        exclude_id: Optional[str] = None,
    ) -> None:
        if not shop_settings["prevent_double_booking"]:
            return

        stmt = (
            select(Appointment)
            .where(Appointment.barber_id == barber_id)
            .where(Appointment.date == date)
            .where(Appointment.time == time)
            .where(Appointment.status != AppointmentStatus.cancelled.value)
        )
        if exclude_id is not None:
            stmt = stmt.where(Appointment.id != exclude_id)

        if self.session.exec(stmt).first() is not None:
            raise ConflictError("Barber already has an appointment at that time")


class PublicBookingService(AppointmentService):
    """Self-service booking from the website widget.

    The widget offers no service or barber selection, so every booking goes
    to the configured default service and placeholder barber. The client is
    matched by phone number; name and email from the latest submission win.
    """

    def book(self, data: PublicBookingCreate) -> Appointment:
        time = validate_time(data.time)
        date = normalize_date(data.date)

        # client upsert and appointment insert commit together
        try:
            client = self._upsert_client(data)
            service = self._default_service()
            barber = self._default_barber()
            self._ensure_slot_free(barber.id, date, time)

            appointment = Appointment(
                client_id=client.id,
                service_id=service.id,
                barber_id=barber.id,
                date=date,
                time=time,
                status=AppointmentStatus.pending.value,
                notes=public_booking["notes"],
            )
            self.session.add(appointment)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        self.session.refresh(appointment)
        logger.info(f"Public appointment {appointment.id} booked for phone {data.phone}")
        return appointment

    def _upsert_client(self, data: PublicBookingCreate) -> Client:
        client = self.session.exec(
            select(Client).where(Client.phone == data.phone).order_by(col(Client.created_at))
        ).first()

        if client is None:
            client = Client(
                first_name=data.name,
                last_name="",
                email=data.email,
                phone=data.phone,
            )
        else:
            client.first_name = data.name
            client.email = data.email
            client.updated_at = utcnow()

        self.session.add(client)
        self.session.flush()
        return client

    def _default_service(self) -> Service:
        keyword = public_booking["service_keyword"]
        service = self.session.exec(
            select(Service)
            .where(col(Service.is_active).is_(True))
            .where(col(Service.name).icontains(keyword, autoescape=True))
            .order_by(col(Service.created_at))
        ).first()

        if service is None:
            logger.error(f"No active service matching '{keyword}' for public bookings")
            raise ConfigurationError("Service not found, please contact the administrator")
        return service

    def _default_barber(self) -> Barber:
        first_name = public_booking["barber_first_name"]
        last_name = public_booking["barber_last_name"]
        barber = self.session.exec(
            select(Barber)
            .where(col(Barber.is_active).is_(True))
            .where(func.lower(Barber.first_name) == first_name.lower())
            .where(func.lower(Barber.last_name) == last_name.lower())
            .order_by(col(Barber.created_at))
        ).first()

        if barber is None:
            active = self.session.exec(
                select(Barber).where(col(Barber.is_active).is_(True)).order_by(col(Barber.first_name))
            ).all()
            logger.error(
                f"Default barber '{first_name} {last_name}' not found, {len(active)} active barbers"
            )
            raise ConfigurationError(
                "Barber not found, please contact the administrator",
                details={
                    "availableBarbers": [
                        {"id": b.id, "firstName": b.first_name, "lastName": b.last_name}
                        for b in active
                    ]
                },
            )
        return barber
