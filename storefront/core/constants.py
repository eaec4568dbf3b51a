from __future__ import annotations

import os


PRODUCTS_COLLECTION = "products"
USERS_COLLECTION = "users"
MIN_PASSWORD_LENGTH = 6

DEFAULT_ALLOWED_ORIGINS = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]

ENV_ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "").split(",")
    if origin.strip()
]

ALLOWED_ORIGINS = ENV_ALLOWED_ORIGINS or DEFAULT_ALLOWED_ORIGINS

REQUEST_ID_HEADER = "X-Request-ID"
