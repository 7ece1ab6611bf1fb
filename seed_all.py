"""
Master Database Seeding Script
Creates database tables and populates them with demo users and their tasks
"""

from sqlalchemy.orm import Session

from create_tables import create_tables
from demo_tasks import DEMO_TASKS
from demo_users import DEMO_USERS
from taskboard.database import SessionLocal
from taskboard.models import Task, User
from taskboard.services.auth_service import normalize_email
from taskboard.utils.security import hash_password


def seed_demo_users(session: Session) -> dict:
    """Create demo users, skipping any whose email already exists. Returns {email: user}"""
    print(f"\n{'='*60}")
    print("🚀 Creating Demo Users")
    print(f"{'='*60}")

    created = {}
    for user_data in DEMO_USERS:
        email = normalize_email(user_data["email"])
        if session.query(User).filter(User.email == email).first():
            print(f"[SKIP] User {email} already exists, skipping...")
            continue

        user = User(
            email=email,
            username=user_data["username"],
            hashed_password=hash_password(user_data["password"]),
        )
        session.add(user)
        session.flush()
        created[email] = user
        print(f"[SUCCESS] Created user: {user.username} ({email})")

    return created


def seed_demo_tasks(session: Session, users: dict) -> int:
    """Create the demo tasks of freshly created users. Returns the number of tasks added"""
    print(f"\n{'='*60}")
    print("🚀 Creating Demo Tasks")
    print(f"{'='*60}")

    count = 0
    for email, user in users.items():
        for task_data in DEMO_TASKS.get(email, []):
            session.add(Task(title=task_data["title"], status=task_data["status"], user_id=user.id))
            count += 1
        print(f"[SUCCESS] Added {len(DEMO_TASKS.get(email, []))} tasks for {email}")
    return count


def seed_all(session: Session) -> dict:
    try:
        users = seed_demo_users(session)
        task_count = seed_demo_tasks(session, users)
        session.commit()
    except Exception:
        session.rollback()
        raise

    summary = {"users": len(users), "tasks": task_count}
    print(f"\n[SUCCESS] Seeded {summary['users']} users and {summary['tasks']} tasks")
    return summary


def main():
    if not create_tables():
        raise SystemExit(1)

    session = SessionLocal()
    try:
        seed_all(session)
    finally:
        session.close()


if __name__ == "__main__":
    main()
