import logging
from typing import Any, Dict, Optional

from ..constants import CLICK_ACTION, NOTIFICATION_TITLE_TEMPLATE
from ..firebase_service import FirestoreService, collect_fcm_tokens
from ..push_service import FCMService, MulticastResult

logger = logging.getLogger("mentorchat")


def build_notification(
    mentor_name: str,
    message: str,
    mentor_id: str,
    college: str,
    message_id: str,
) -> Dict[str, Any]:
    return {
        "title": NOTIFICATION_TITLE_TEMPLATE.format(mentor_name=mentor_name),
        "body": message,
        "click_action": CLICK_ACTION,
        "data": {
            "mentorId": mentor_id,
            "college": college,
            "messageId": message_id,
        },
    }


def dispatch_mentor_message(
    message_id: str,
    message_data: Optional[Dict[str, Any]],
    store: FirestoreService,
    push: FCMService,
) -> Optional[MulticastResult]:
    """
    Notify every student of the message's college that has a device token.

    Missing data and empty recipient sets end the invocation quietly.
    Platform errors are logged and swallowed so the trigger never retries.

    Returns:
        MulticastResult of the send, or None when nothing was sent
    """
    if not message_data:
        logger.info(f"[NOTIFY] No message data found for {message_id}")
        return None

    college = message_data.get("college")
    message = message_data.get("message")
    mentor_id = message_data.get("mentorId")

    if not all([college, message, mentor_id]):
        logger.info(f"[NOTIFY] Missing required message fields for {message_id}")
        return None

    try:
        students = store.find_students_with_tokens(college)
        if not students:
            logger.info(f"[NOTIFY] No students with FCM tokens found for college: {college}")
            return None

        tokens = collect_fcm_tokens(students)
        if not tokens:
            logger.info("[NOTIFY] No valid FCM tokens found")
            return None

        mentor_name = store.get_mentor_name(mentor_id)
        notification = build_notification(mentor_name, message, mentor_id, college, message_id)

        result = push.send_multicast(
            tokens,
            title=notification["title"],
            body=notification["body"],
            data=notification["data"],
            click_action=notification["click_action"],
        )
        logger.info(f"[NOTIFY] Notifications sent: {result.success_count}")
        return result

    except Exception:
        logger.exception(f"[NOTIFY] Error sending notifications for {message_id}")
        return None
