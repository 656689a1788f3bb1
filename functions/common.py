"""
Common Configuration and Shared Utilities

Shared initialization and configuration for all Cloud Function modules:
- Firebase Admin initialization
- Firestore / Gemini / generator settings
- Database access
"""

import os

from firebase_admin import firestore_async, initialize_app

# Project / database
PROJECT_ID = os.environ.get("VERTEX_AI_PROJECT", os.environ.get("GCLOUD_PROJECT"))
DATABASE_ID = os.environ.get("FIRESTORE_DATABASE_ID", "(default)")
FUNCTIONS_REGION = os.environ.get("FUNCTIONS_REGION", "us-central1")

# Collection holding one document per canonical phrase
WORDS_COLLECTION = os.environ.get("WORDS_COLLECTION", "words")

# Models
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")

# Firestore query limits (array-contains-any and not-in accept 10 values each)
ARRAY_QUERY_LIMIT = 10
NOT_IN_LIMIT = 10

# Request limits enforced by the dictionary generator
MAX_WORDS = 13
MAX_CHARS = 130

# Timeouts (seconds)
BATCH_TIMEOUT_SEC = float(os.environ.get("BATCH_TIMEOUT_SEC", "10"))
GENERATOR_TIMEOUT_SEC = float(os.environ.get("GENERATOR_TIMEOUT_SEC", "120"))

# Share of combination batches queried before exclusions kick in
UNOPTIMIZED_SHARE = 1 / 3


def get_generator_url() -> str:
    """URL of the dictionary_generator function (overridable for local emulators)."""
    url = os.environ.get("GENERATOR_URL")
    if url:
        return url
    return f"https://{FUNCTIONS_REGION}-{PROJECT_ID}.cloudfunctions.net/dictionary_generator"


def init_firebase() -> None:
    """Initialize Firebase Admin (safe to call multiple times)."""
    try:
        initialize_app()
    except ValueError:
        pass  # Already initialized


def get_async_db():
    """Get async Firestore client for the configured database."""
    init_firebase()
    return firestore_async.client(database_id=DATABASE_ID)
