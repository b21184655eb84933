from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional

import firebase_admin
from firebase_admin import credentials
from loguru import logger

FIREBASE_APP_NAME = "realtime-dispatch"
TOKEN_URI = "https://oauth2.googleapis.com/token"


@dataclass(frozen=True)
class FirebaseCredentials:
    project_id: str
    client_email: str
    private_key: str


# ------------------------------------------------------------
# Helpers
# ------------------------------------------------------------
def normalize_private_key(private_key: Optional[str]) -> Optional[str]:
    """Keys pasted into .env files usually carry literal "\\n" sequences."""
    if not private_key or not isinstance(private_key, str):
        return private_key
    return private_key.replace("\\n", "\n") if "\\n" in private_key else private_key


def candidate_service_account_paths(
    environ: Mapping[str, str] = os.environ,
    base_dir: Optional[Path] = None,
) -> List[Path]:
    base = base_dir or Path.cwd()
    paths: List[Path] = []

    configured = environ.get("FIREBASE_SERVICE_ACCOUNT_PATH")
    if configured:
        paths.append(base / configured)

    paths.append(base / "config" / "serviceAccountKey.json")
    paths.append(base / "config" / "firebase-service-account.json")
    paths.append(base / "firebaseconfig.json")
    return paths


def credentials_from_file(paths: List[Path]) -> Optional[FirebaseCredentials]:
    for path in paths:
        if not path.exists():
            continue
        try:
            parsed = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed reading Firebase service account at {path}: {e}")
            continue

        if not isinstance(parsed, dict):
            continue
        if parsed.get("project_id") and parsed.get("client_email") and parsed.get("private_key"):
            return FirebaseCredentials(
                project_id=parsed["project_id"],
                client_email=parsed["client_email"],
                private_key=normalize_private_key(parsed["private_key"]),
            )

    return None


def resolve_credentials(
    environ: Mapping[str, str] = os.environ,
    base_dir: Optional[Path] = None,
) -> Optional[FirebaseCredentials]:
    project_id = environ.get("FIREBASE_PROJECT_ID")
    client_email = environ.get("FIREBASE_CLIENT_EMAIL")
    private_key = normalize_private_key(environ.get("FIREBASE_PRIVATE_KEY"))

    if project_id and client_email and private_key:
        return FirebaseCredentials(project_id, client_email, private_key)

    return credentials_from_file(candidate_service_account_paths(environ, base_dir))


def default_database_url(project_id: Optional[str]) -> str:
    return f"https://{project_id}-default-rtdb.firebaseio.com" if project_id else ""


def resolve_database_url(
    creds: Optional[FirebaseCredentials],
    environ: Mapping[str, str] = os.environ,
) -> str:
    return environ.get("FIREBASE_DATABASE_URL") or default_database_url(
        creds.project_id if creds else None
    )


# ------------------------------------------------------------
# App init
# ------------------------------------------------------------
def get_or_init_firebase_app(creds: FirebaseCredentials, database_url: str):
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    cert = credentials.Certificate(
        {
            "type": "service_account",
            "project_id": creds.project_id,
            "client_email": creds.client_email,
            "private_key": creds.private_key,
            "token_uri": TOKEN_URI,
        }
    )
    return firebase_admin.initialize_app(
        cert,
        {"databaseURL": database_url},
        name=FIREBASE_APP_NAME,
    )
