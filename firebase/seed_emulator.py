"""
Firestore seed script (Emulator)
Run with: FIREBASE_USE_EMULATOR=true python3 firebase/seed_emulator.py [--reset]
"""

import os
import sys
from datetime import datetime, timedelta, timezone

import firebase_admin
from firebase_admin import firestore

SEEDED_COLLECTIONS = ("students", "mentors", "anonymous_chats")


def _init_firebase():
    if os.environ.get("FIREBASE_USE_EMULATOR", "").lower() != "true":
        print("FIREBASE_USE_EMULATOR is not set. Refusing to seed a real project.", file=sys.stderr)
        sys.exit(1)

    os.environ.setdefault("FIRESTORE_EMULATOR_HOST", "localhost:8080")
    project_id = os.environ.get("FIREBASE_PROJECT_ID", "demo-mentorchat")
    firebase_admin.initialize_app(options={"projectId": project_id})


def _clear_collection(collection_ref):
    for doc in collection_ref.stream():
        doc.reference.delete()


def clear_all(db):
    print("🧹 Clearing emulator data...")
    for name in SEEDED_COLLECTIONS:
        _clear_collection(db.collection(name))
    print("✅ Clear completed")


def seed(db):
    print("🌱 Seeding Firestore emulator...")

    college_a = "college_iit_delhi"
    college_b = "college_nit_trichy"

    db.collection("mentors").document("mentor_lee").set({"name": "Dr. Lee"})
    db.collection("mentors").document("mentor_rao").set({"name": "Prof. Rao"})

    students = [
        ("student_1", college_a, "token-a1"),
        ("student_2", college_a, None),
        ("student_3", college_a, "token-a3"),
        ("student_4", college_b, "token-b1"),
        ("student_5", college_b, None),
    ]
    for uid, college, token in students:
        db.collection("students").document(uid).set({
            "college": college,
            "fcmToken": token,
        })

    now = datetime.now(timezone.utc)
    chat_ages = {
        "chat_stale_1": timedelta(hours=48),
        "chat_stale_2": timedelta(hours=30),
        "chat_stale_3": timedelta(hours=24, minutes=5),
        "chat_fresh_1": timedelta(hours=2),
        "chat_fresh_2": timedelta(minutes=10),
    }
    for chat_id, age in chat_ages.items():
        db.collection("anonymous_chats").document(chat_id).set({
            "message": f"seeded {chat_id}",
            "timestamp": now - age,
        })

    print(f"✅ Seeded {len(students)} students, 2 mentors, {len(chat_ages)} anonymous chats")
    print("   Create mentormessages/{id} with college/message/mentorId to trigger a send.")


def main():
    _init_firebase()
    db = firestore.client()

    if "--reset" in sys.argv:
        clear_all(db)

    seed(db)


if __name__ == "__main__":
    main()
