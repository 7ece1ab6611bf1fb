"""
Demo tasks, keyed by the email of the demo user who owns them
"""

from taskboard.models.task import TaskStatus

DEMO_TASKS = {
    "alice@example.com": [
        {"title": "Write project proposal", "status": TaskStatus.COMPLETED.value},
        {"title": "Review pull requests", "status": TaskStatus.IN_PROGRESS.value},
        {"title": "Buy milk", "status": TaskStatus.TODO.value},
        {"title": "Book dentist appointment", "status": TaskStatus.TODO.value},
    ],
    "bob@example.com": [
        {"title": "Prepare sprint demo", "status": TaskStatus.IN_PROGRESS.value},
        {"title": "Update onboarding docs", "status": TaskStatus.TODO.value},
        {"title": "Renew SSL certificate", "status": TaskStatus.COMPLETED.value},
    ],
    "chandra@example.com": [
        {"title": "Plan team offsite", "status": TaskStatus.TODO.value},
    ],
}
