from __future__ import annotations

import logging
from pathlib import Path

import firebase_admin
from firebase_admin import credentials

from storefront.core.config import Settings

logger = logging.getLogger(__name__)


def initialize_firebase_app(settings: Settings) -> firebase_admin.App:
    """Create (or reuse) a named firebase_admin App for the configured project.

    Uses the service account file from ``FIREBASE_CREDENTIALS_PATH`` when set,
    otherwise application default credentials (as on Cloud Run).
    """
    app_name = f"storefront-{settings.firebase_project_id}"
    try:
        return firebase_admin.get_app(app_name)
    except ValueError:
        pass

    if settings.firebase_credentials_path:
        credentials_path = Path(settings.firebase_credentials_path).expanduser().resolve()
        if not credentials_path.exists():
            raise FileNotFoundError(f"Credentials file not found at: {credentials_path}")
        cred = credentials.Certificate(str(credentials_path))
    else:
        cred = credentials.ApplicationDefault()

    logger.info("Initializing Firebase with project ID: %s", settings.firebase_project_id)
    return firebase_admin.initialize_app(
        cred,
        {"projectId": settings.firebase_project_id},
        name=app_name,
    )
