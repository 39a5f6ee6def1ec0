# barbercrm/deps.py

from fastapi import Depends, HTTPException

from barbercrm.auth import get_current_user
from barbercrm.schemas import UserRole

BARBER_ROLES = (UserRole.BARBER, UserRole.ADMIN, UserRole.ADMINBARBER)


def require_role(user: dict, *roles: UserRole):
    if user["role"] not in {role.value for role in roles}:
        raise HTTPException(status_code=403, detail="Forbidden")


def require_barber(current_user: dict = Depends(get_current_user)) -> dict:
    require_role(current_user, *BARBER_ROLES)
    return current_user
