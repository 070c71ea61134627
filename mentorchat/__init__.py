"""Push fan-out for mentor messages and retention cleanup of anonymous chats."""
