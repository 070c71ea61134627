import logging
from datetime import datetime
from typing import Optional

from ..constants import ANONYMOUS_CHAT_RETENTION_HOURS
from ..firebase_service import FirestoreService
from ..utils import retention_cutoff, utc_now

logger = logging.getLogger("mentorchat")


def sweep_anonymous_chats(store: FirestoreService, now: Optional[datetime] = None) -> int:
    """
    Delete anonymous chats older than the retention window in one batch.

    Errors propagate so the scheduler records a failed run.

    Returns number of deleted documents.
    """
    cutoff = retention_cutoff(now or utc_now(), ANONYMOUS_CHAT_RETENTION_HOURS)

    old_chats = store.find_anonymous_chats_before(cutoff)
    if not old_chats:
        logger.info("[SWEEP] No old anonymous chats to delete.")
        return 0

    deleted = store.delete_documents(old_chats)
    logger.info(f"[SWEEP] Deleted {deleted} old anonymous chats (cutoff={cutoff.isoformat()}).")
    return deleted
