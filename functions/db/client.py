"""Firestore client management"""
import os
from functools import lru_cache
from pathlib import Path

import firebase_admin
from dotenv import load_dotenv
from firebase_admin import firestore
from google.cloud.firestore import Client

# Load environment variables for LOCAL development only (emulator runs)
# In Cloud Functions, env vars are set at deploy time - don't override them with .env files
# K_SERVICE is set by the Cloud Functions / Cloud Run runtime
_is_cloud_function = os.getenv("K_SERVICE") is not None

if not _is_cloud_function:
    # Local development: load .env.local (takes precedence over .env)
    _functions_dir = Path(__file__).parent.parent
    env_local = _functions_dir / '.env.local'
    env_file = _functions_dir / '.env'

    if env_local.exists():
        load_dotenv(env_local, override=True)
    elif env_file.exists():
        load_dotenv(env_file, override=True)


def get_app() -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it on first use.

    Credentials come from the runtime (Application Default Credentials);
    against the emulator, FIRESTORE_EMULATOR_HOST is honored by the client.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        return firebase_admin.initialize_app()


@lru_cache(maxsize=None)
def get_db() -> Client:
    """
    Get the Firestore client, created once per function instance.

    Usage in a trigger:
        from db.client import get_db

        @firestore_fn.on_document_deleted(document="jobs/{jobId}")
        def cleanup(event):
            process_job_deleted(get_db(), event.params["jobId"])
    """
    from config.settings import settings

    return firestore.client(app=get_app(), database_id=settings.FIRESTORE_DATABASE)
