"""Test environment: in-memory SQLite, throwaway upload dir and cheap bcrypt, set before app import."""

import os
import tempfile

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "testsecret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="bookshop-test-uploads-")
