from .messages import build_notification, dispatch_mentor_message
from .cleanup import sweep_anonymous_chats

__all__ = [
    "build_notification",
    "dispatch_mentor_message",
    "sweep_anonymous_chats",
]
