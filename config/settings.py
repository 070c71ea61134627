import os

FIREBASE_USE_EMULATOR = os.environ.get("FIREBASE_USE_EMULATOR", "false").lower() == "true"
FIRESTORE_EMULATOR_HOST = os.environ.get("FIRESTORE_EMULATOR_HOST", "localhost:8080")
FIREBASE_PROJECT_ID = os.environ.get("FIREBASE_PROJECT_ID")

# Service account, either inline JSON or a file path.
# Without either, Application Default Credentials are used (Cloud Functions runtime).
FIREBASE_SERVICE_ACCOUNT = os.environ.get("FIREBASE_SERVICE_ACCOUNT")
FIREBASE_SERVICE_ACCOUNT_PATH = os.environ.get("FIREBASE_SERVICE_ACCOUNT_PATH")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# Logging Configuration
# Console only: the functions runtime collects stdout/stderr and the
# deployed filesystem is read-only.
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "[{asctime}] {levelname} {name} {message}",
            "style": "{",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "mentorchat": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
