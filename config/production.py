import os

STORE_CONFIG = {
    "backend": os.getenv("STORE_BACKEND", "file"),
    "path": os.getenv("STORE_PATH", "/var/lib/saferoute"),
}

# ADMIN_SECRET / PARENT_SECRET hold Werkzeug hashes when AUTH_SCHEME=hashed
AUTH_CONFIG = {
    "scheme": os.getenv("AUTH_SCHEME", "plaintext"),
    "admin_id": os.getenv("ADMIN_ID", "super-admin"),
    "admin_name": os.getenv("ADMIN_NAME", "Super Admin"),
    "admin_username": os.getenv("ADMIN_USERNAME", "Admin"),
    "admin_secret": os.getenv("ADMIN_SECRET", "12345"),
    "parent_id": os.getenv("PARENT_ID", "parent-1"),
    "parent_name": os.getenv("PARENT_NAME", "Emma Johnson"),
    "parent_username": os.getenv("PARENT_USERNAME", "Parent"),
    "parent_secret": os.getenv("PARENT_SECRET", "12345"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_SEED_STORE = bool(int(os.getenv("AUTO_SEED_STORE", "0")))
