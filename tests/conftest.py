import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from barbercrm.auth import create_access_token
from barbercrm.core import normalize_date
from barbercrm.db import get_session
from barbercrm.main import app
from barbercrm.models import Appointment, Barber, Client, Service, User


@pytest.fixture(name="session")
def session_fixture():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def _user(session: Session, email: str, role: str) -> User:
    user = User(email=email, password_hash="not-used", role=role, first_name="Test", last_name=role.title())
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def _headers(user: User) -> dict:
    token = create_access_token({"sub": user.email, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def barber_headers(session: Session) -> dict:
    return _headers(_user(session, "barber@clippercut.com", "BARBER"))


@pytest.fixture
def admin_headers(session: Session) -> dict:
    return _headers(_user(session, "admin@clippercut.com", "ADMIN"))


@pytest.fixture
def client_role_headers(session: Session) -> dict:
    return _headers(_user(session, "someone@example.com", "CLIENT"))


@pytest.fixture
def customer(session: Session) -> Client:
    record = Client(first_name="Juan", last_name="Pérez", email="juan@example.com", phone="5512345678")
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@pytest.fixture
def haircut(session: Session) -> Service:
    record = Service(name="Corte de Cabello", price=150, duration=30)
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@pytest.fixture
def default_barber(session: Session) -> Barber:
    record = Barber(first_name="Barbero", last_name="ClipperCut", phone="5555555555")
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@pytest.fixture
def make_appointment(session: Session, customer: Client, haircut: Service, default_barber: Barber):
    def _make(date="2024-05-10", time="10:00", status="pending", client=None, **extra) -> Appointment:
        appointment = Appointment(
            client_id=(client or customer).id,
            service_id=haircut.id,
            barber_id=default_barber.id,
            date=normalize_date(date),
            time=time,
            status=status,
            **extra,
        )
        session.add(appointment)
        session.commit()
        session.refresh(appointment)
        return appointment

    return _make
