"""
Test environment: force an in-memory SQLite database, cheap bcrypt and no rate
limiting before any acquisitions module reads Settings.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "dev"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes!!"
os.environ["JWT_EXPIRE_MINUTES"] = "60"
os.environ["LOG_LEVEL"] = "WARNING"
