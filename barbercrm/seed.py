# barbercrm/seed.py
"""Create the reference records the app needs to accept bookings.

Run with ``python -m barbercrm.seed``. Existing records are left untouched,
so the command is safe to run on every deploy.
"""

import logging
import os

from sqlalchemy import func
from sqlmodel import Session, select

from barbercrm.auth import hash_password
from barbercrm.config import public_booking
from barbercrm.db import create_db_and_tables, engine
from barbercrm.models import Barber, Service, User
from barbercrm.schemas import UserRole

logger = logging.getLogger(__name__)

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@clippercut.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")
BARBER_EMAIL = os.getenv("SEED_BARBER_EMAIL", "barberos@clippercut.com.mx")
BARBER_PASSWORD = os.getenv("SEED_BARBER_PASSWORD", "BarberiaClipper123")

DEFAULT_SERVICE = {
    "name": "Corte de Cabello",
    "description": "Corte de cabello básico",
    "price": 150,
    "duration": 30,
}


def _ensure_user(session: Session, email: str, password: str, role: UserRole, first_name: str, last_name: str) -> User:
    user = session.exec(select(User).where(User.email == email)).first()
    if user is not None:
        logger.info(f"User {email} already exists")
        return user

    user = User(
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        role=role.value,
    )
    session.add(user)
    logger.info(f"Created {role.value} user {email}")
    return user


def _ensure_default_barber(session: Session) -> Barber:
    first_name = public_booking["barber_first_name"]
    last_name = public_booking["barber_last_name"]
    barber = session.exec(
        select(Barber)
        .where(func.lower(Barber.first_name) == first_name.lower())
        .where(func.lower(Barber.last_name) == last_name.lower())
    ).first()
    if barber is not None:
        if not barber.is_active:
            barber.is_active = True
            session.add(barber)
            logger.info(f"Reactivated default barber {barber.id}")
        return barber

    barber = Barber(
        first_name=first_name,
        last_name=last_name,
        email=BARBER_EMAIL,
        phone="5555555555",
        instagram="clippercut_barberia",
    )
    session.add(barber)
    logger.info(f"Created default barber {first_name} {last_name}")
    return barber


def _ensure_default_service(session: Session) -> Service:
    service = session.exec(
        select(Service).where(Service.name == DEFAULT_SERVICE["name"])
    ).first()
    if service is not None:
        return service

    service = Service(**DEFAULT_SERVICE)
    session.add(service)
    logger.info(f"Created default service {service.name}")
    return service


def seed(session: Session) -> None:
    _ensure_user(session, ADMIN_EMAIL, ADMIN_PASSWORD, UserRole.ADMIN, "Admin", "User")
    _ensure_user(
        session,
        BARBER_EMAIL,
        BARBER_PASSWORD,
        UserRole.BARBER,
        public_booking["barber_first_name"],
        public_booking["barber_last_name"],
    )
    _ensure_default_barber(session)
    _ensure_default_service(session)
    session.commit()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    create_db_and_tables()
    with Session(engine) as session:
        seed(session)
    logger.info("Seed completed")


if __name__ == "__main__":
    main()
