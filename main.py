"""
Cloud Functions for Firebase entrypoints.

- send_mentor_message_notification: on create of mentormessages/{messageId}
- delete_old_anonymous_chats: every 24 hours
"""
import logging.config
from typing import Optional

from firebase_functions import firestore_fn, scheduler_fn

from config import settings
from mentorchat.constants import CLEANUP_SCHEDULE, MENTOR_MESSAGE_DOCUMENT
from mentorchat.firebase_service import firestore_service
from mentorchat.handlers import dispatch_mentor_message, sweep_anonymous_chats
from mentorchat.push_service import push_service

logging.config.dictConfig(settings.LOGGING)


@firestore_fn.on_document_created(document=MENTOR_MESSAGE_DOCUMENT)
def send_mentor_message_notification(
    event: firestore_fn.Event[Optional[firestore_fn.DocumentSnapshot]],
) -> None:
    snapshot = event.data
    message_data = snapshot.to_dict() if snapshot is not None else None
    dispatch_mentor_message(
        event.params["messageId"],
        message_data,
        store=firestore_service,
        push=push_service,
    )


@scheduler_fn.on_schedule(schedule=CLEANUP_SCHEDULE)
def delete_old_anonymous_chats(event: scheduler_fn.ScheduledEvent) -> None:
    sweep_anonymous_chats(firestore_service)
