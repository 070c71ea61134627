STUDENTS_COLLECTION = "students"
MENTORS_COLLECTION = "mentors"
ANONYMOUS_CHATS_COLLECTION = "anonymous_chats"

MENTOR_MESSAGE_DOCUMENT = "mentormessages/{messageId}"
CLEANUP_SCHEDULE = "every 24 hours"

ANONYMOUS_CHAT_RETENTION_HOURS = 24

DEFAULT_MENTOR_NAME = "Mentor"
NOTIFICATION_TITLE_TEMPLATE = "Message from {mentor_name}"
CLICK_ACTION = "FLUTTER_NOTIFICATION_CLICK"
