"""
Demo users for the task dashboard
Every demo account shares the same password so the seeded data is easy to explore
"""

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"username": "alice", "email": "alice@example.com", "password": DEMO_PASSWORD},
    {"username": "bob", "email": "bob@example.com", "password": DEMO_PASSWORD},
    {"username": "chandra", "email": "chandra@example.com", "password": DEMO_PASSWORD},
]
