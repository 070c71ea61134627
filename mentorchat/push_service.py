"""
Push notification service - multicast to Android/iOS devices via FCM (Firebase Admin SDK)
"""
import logging
from dataclasses import dataclass
from typing import Dict, List

from firebase_admin import messaging

from .constants import CLICK_ACTION
from .firebase_service import get_firebase_app

logger = logging.getLogger("mentorchat")


@dataclass
class MulticastResult:
    """Result of a multicast push attempt"""
    success_count: int
    failure_count: int
    token_count: int


class FCMService:
    """
    Firebase Cloud Messaging service.
    Uses Firebase Admin SDK for sending messages.
    """

    def __init__(self, app=None):
        self._app = app

    @property
    def app(self):
        """Firebase app used for sending (lazy initialization)"""
        if self._app is None:
            self._app = get_firebase_app()
        return self._app

    def build_message(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Dict[str, str],
        click_action: str = CLICK_ACTION,
    ) -> messaging.MulticastMessage:
        # Ensure all data values are strings
        string_data = {k: str(v) for k, v in data.items()}

        return messaging.MulticastMessage(
            tokens=list(tokens),
            notification=messaging.Notification(title=title, body=body),
            data=string_data,
            android=messaging.AndroidConfig(
                notification=messaging.AndroidNotification(click_action=click_action),
            ),
            apns=messaging.APNSConfig(
                payload=messaging.APNSPayload(aps=messaging.Aps(category=click_action)),
            ),
        )

    def send_multicast(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Dict[str, str],
        click_action: str = CLICK_ACTION,
    ) -> MulticastResult:
        """
        Send one notification to many device tokens in a single call.

        Per-token failures are counted in the result, not retried.
        Errors affecting the whole call propagate.
        """
        if not tokens:
            return MulticastResult(success_count=0, failure_count=0, token_count=0)

        message = self.build_message(tokens, title, body, data, click_action)
        response = messaging.send_each_for_multicast(message, app=self.app)

        if response.failure_count:
            logger.warning(
                f"[FCM] {response.failure_count} of {len(tokens)} tokens failed"
            )
        return MulticastResult(
            success_count=response.success_count,
            failure_count=response.failure_count,
            token_count=len(tokens),
        )


# Singleton instance
push_service = FCMService()
