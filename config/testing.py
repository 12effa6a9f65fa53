import os

STORE_CONFIG = {
    "backend": "memory",
    "path": os.getenv("STORE_PATH", ""),
}

AUTH_CONFIG = {
    "scheme": "plaintext",
    "admin_id": "super-admin",
    "admin_name": "Super Admin",
    "admin_username": "Admin",
    "admin_secret": "12345",
    "parent_id": "parent-1",
    "parent_name": "Emma Johnson",
    "parent_username": "Parent",
    "parent_secret": "12345",
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_SEED_STORE = bool(int(os.getenv("AUTO_SEED_STORE", "0")))
