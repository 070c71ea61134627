"""
Firebase service - Firestore access for mentor message fan-out and chat cleanup.

Firestore Collections:
- students/{uid}: college, fcmToken (nullable)
- mentors/{mentorId}: name
- anonymous_chats/{chatId}: timestamp
"""
import json
import logging
import os
from datetime import datetime
from typing import List

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from config import settings

from .constants import (
    ANONYMOUS_CHATS_COLLECTION,
    DEFAULT_MENTOR_NAME,
    MENTORS_COLLECTION,
    STUDENTS_COLLECTION,
)

logger = logging.getLogger("mentorchat")

# Firebase Admin initialization
_firebase_app = None
_firestore_client = None


def _load_credential():
    """Service account credential from the environment, or None for ADC."""
    if settings.FIREBASE_SERVICE_ACCOUNT:
        try:
            sa_dict = json.loads(settings.FIREBASE_SERVICE_ACCOUNT)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid FIREBASE_SERVICE_ACCOUNT JSON: {e}") from e
        logger.info("[FIREBASE] Using FIREBASE_SERVICE_ACCOUNT env var")
        return credentials.Certificate(sa_dict)

    path = settings.FIREBASE_SERVICE_ACCOUNT_PATH
    if path and os.path.exists(path):
        logger.info(f"[FIREBASE] Using service account from {path}")
        return credentials.Certificate(path)

    return None


def get_firebase_app():
    """Get or initialize Firebase Admin app"""
    global _firebase_app

    if _firebase_app is not None:
        return _firebase_app

    logger.info(
        f"[FIREBASE] init: use_emulator={settings.FIREBASE_USE_EMULATOR}, "
        f"project_id={settings.FIREBASE_PROJECT_ID}"
    )

    options = {}
    if settings.FIREBASE_USE_EMULATOR:
        # The Firestore client reads this at construction time
        os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIRESTORE_EMULATOR_HOST
        options["projectId"] = settings.FIREBASE_PROJECT_ID or "demo-mentorchat"
        cred = None
    else:
        if settings.FIREBASE_PROJECT_ID:
            options["projectId"] = settings.FIREBASE_PROJECT_ID
        cred = _load_credential()

    try:
        _firebase_app = firebase_admin.initialize_app(credential=cred, options=options or None)
        logger.info(
            "[FIREBASE] Admin initialized "
            + (f"with EMULATOR ({settings.FIRESTORE_EMULATOR_HOST})" if settings.FIREBASE_USE_EMULATOR else "(production)")
        )
    except ValueError:
        # Already initialized
        _firebase_app = firebase_admin.get_app()
        logger.info("[FIREBASE] Admin already initialized")

    return _firebase_app


def get_firestore():
    """Get Firestore client"""
    global _firestore_client

    if _firestore_client is None:
        _firestore_client = firestore.client(get_firebase_app())
    return _firestore_client


def collect_fcm_tokens(docs: list) -> List[str]:
    """Non-empty fcmToken values in snapshot order"""
    tokens = []
    for doc in docs:
        token = (doc.to_dict() or {}).get("fcmToken")
        if token:
            tokens.append(token)
    return tokens


class FirestoreService:
    """Service class for Firestore operations"""

    def __init__(self, db=None):
        self._db = db

    @property
    def db(self):
        """Lazy initialization of Firestore client"""
        if self._db is None:
            self._db = get_firestore()
        return self._db

    # =========================================================================
    # Students / Mentors
    # =========================================================================

    def find_students_with_tokens(self, college: str) -> list:
        """
        Snapshots of students in a college whose fcmToken is not null.

        Expected document structure at students/{uid}:
        {
            "college": "college_id",
            "fcmToken": "device_token" | null,
            ...
        }
        """
        query = (
            self.db.collection(STUDENTS_COLLECTION)
            .where(filter=FieldFilter("college", "==", college))
            .where(filter=FieldFilter("fcmToken", "!=", None))
        )
        return list(query.stream())

    def get_mentor_name(self, mentor_id: str) -> str:
        """
        Display name of a mentor, or the placeholder when unknown.

        A mentor document without a usable name gets the placeholder too,
        so the title never reads "Message from None".
        """
        doc = self.db.collection(MENTORS_COLLECTION).document(mentor_id).get()
        if not doc.exists:
            logger.info(f"[FIREBASE] Mentor document not found: {mentor_id}")
            return DEFAULT_MENTOR_NAME
        return (doc.to_dict() or {}).get("name") or DEFAULT_MENTOR_NAME

    # =========================================================================
    # Anonymous Chats
    # =========================================================================

    def find_anonymous_chats_before(self, cutoff_time: datetime) -> list:
        """Snapshots of anonymous chats with timestamp <= cutoff_time"""
        query = self.db.collection(ANONYMOUS_CHATS_COLLECTION).where(
            filter=FieldFilter("timestamp", "<=", cutoff_time)
        )
        return list(query.stream())

    def delete_documents(self, docs: list) -> int:
        """
        Delete documents in a single atomic batch.

        The batch is not chunked: more documents than one batch accepts
        makes the commit fail and nothing is deleted.

        Returns number of deleted documents.
        """
        if not docs:
            return 0

        batch = self.db.batch()
        for doc in docs:
            batch.delete(doc.reference)
        batch.commit()
        return len(docs)


# Singleton instance
firestore_service = FirestoreService()
