# barbercrm/config.py

import os
import warnings

from dotenv import load_dotenv

load_dotenv()

ENVIRONMENT = os.getenv("ENVIRONMENT", "production")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Database
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barbercrm.db")
DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"

# Auth
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    warnings.warn("SECRET_KEY not set, using an insecure development key", RuntimeWarning, stacklevel=2)
    SECRET_KEY = "change-me-later"
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

# Scheduling
shop_settings = {
    "timezone": os.getenv("BUSINESS_TIMEZONE", "America/Mexico_City"),
    # Fixed offset, DST is not applied
    "utc_offset_hours": int(os.getenv("BUSINESS_UTC_OFFSET_HOURS", "-6")),
    "prevent_double_booking": os.getenv("PREVENT_DOUBLE_BOOKING", "false").lower() == "true",
}

# Public booking widget defaults
public_booking = {
    "service_keyword": os.getenv("DEFAULT_SERVICE_KEYWORD", "Corte"),
    "barber_first_name": os.getenv("DEFAULT_BARBER_FIRST_NAME", "Barbero"),
    "barber_last_name": os.getenv("DEFAULT_BARBER_LAST_NAME", "ClipperCut"),
    "notes": os.getenv("PUBLIC_BOOKING_NOTES", "Appointment created from the website"),
}
