from sqlmodel import select

from barbercrm.auth import create_access_token, hash_password
from barbercrm.models import Barber, Service, User
from barbercrm.seed import seed


def test_login_and_me(client, session):
    session.add(
        User(
            email="barbero@clippercut.com",
            password_hash=hash_password("Barberos123"),
            first_name="Barbero",
            last_name="Principal",
            role="ADMINBARBER",
        )
    )
    session.commit()

    response = client.post("/auth/login", data={"username": "barbero@clippercut.com", "password": "Barberos123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json() == {
        "id": me.json()["id"],
        "email": "barbero@clippercut.com",
        "role": "ADMINBARBER",
        "firstName": "Barbero",
        "lastName": "Principal",
    }
    assert client.get("/appointments", headers={"Authorization": f"Bearer {token}"}).status_code == 200


def test_login_with_wrong_password(client, session):
    session.add(User(email="a@b.com", password_hash=hash_password("right-password"), role="BARBER"))
    session.commit()

    response = client.post("/auth/login", data={"username": "a@b.com", "password": "wrong-password"})
    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get("/appointments", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_token_for_inactive_user(client, session):
    session.add(User(email="gone@b.com", password_hash="x", role="BARBER", status="INACTIVE"))
    session.commit()
    token = create_access_token({"sub": "gone@b.com"})

    response = client.get("/appointments", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_seed_enables_public_booking(client, session):
    seed(session)
    seed(session)

    assert len(session.exec(select(User)).all()) == 2
    assert len(session.exec(select(Barber)).all()) == 1
    assert len(session.exec(select(Service)).all()) == 1

    response = client.post(
        "/appointments/public",
        json={"name": "Ana", "email": "ana@example.com", "phone": "123", "date": "2024-05-10", "time": "10:00"},
    )
    assert response.status_code == 201
