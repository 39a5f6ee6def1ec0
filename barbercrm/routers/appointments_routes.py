# barbercrm/routers/appointments_routes.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from barbercrm.db import get_session
from barbercrm.deps import require_barber
from barbercrm.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentUpdate,
    MessageResponse,
    PublicBookingCreate,
    PublicBookingResponse,
)
from barbercrm.scheduling import AppointmentService, PublicBookingService

router = APIRouter(
    prefix="/appointments",
    tags=["appointments"],
)


def get_appointment_service(session: Session = Depends(get_session)) -> AppointmentService:
    return AppointmentService(session)


def get_public_booking_service(session: Session = Depends(get_session)) -> PublicBookingService:
    return PublicBookingService(session)


def _full_name(record) -> str:
    return f"{record.first_name} {record.last_name}".strip()


@router.post("/public", response_model=PublicBookingResponse, status_code=201)
def public_booking(
    booking: PublicBookingCreate,
    service: PublicBookingService = Depends(get_public_booking_service),
):
    # No authentication: used by the website booking widget
    appointment = service.book(booking)
    return PublicBookingResponse(
        message="Appointment booked successfully",
        appointment=AppointmentPublic.model_validate(appointment),
        service_name=appointment.service.name,
        barber_name=_full_name(appointment.barber),
        client_name=_full_name(appointment.client),
    )


@router.get("", response_model=List[AppointmentPublic])
def list_appointments(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    status: Optional[str] = None,
    name: Optional[str] = None,
    phone: Optional[str] = None,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    appts = service.list_appointments(
        start_date=start_date,
        end_date=end_date,
        status=status,
        name=name,
        phone=phone,
    )
    return [AppointmentPublic.model_validate(a) for a in appts]


@router.get("/last-completed", response_model=List[AppointmentPublic])
def last_completed_appointments(
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    return [AppointmentPublic.model_validate(a) for a in service.last_completed()]


@router.get("/{appointment_id}", response_model=AppointmentPublic)
def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    return AppointmentPublic.model_validate(service.get_appointment(appointment_id))


@router.post("", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    return AppointmentPublic.model_validate(service.create_appointment(appt))


@router.put("/{appointment_id}", response_model=AppointmentPublic)
def update_appointment(
    appointment_id: str,
    appt: AppointmentUpdate,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    return AppointmentPublic.model_validate(service.update_appointment(appointment_id, appt))


@router.delete("/{appointment_id}", response_model=MessageResponse)
def delete_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
    current_user: dict = Depends(require_barber),
):
    service.delete_appointment(appointment_id)
    return {"message": "Appointment deleted successfully"}
