import os

SECRET_KEY = "test-secret"

API_BASE_URL = os.getenv("API_BASE_URL", "http://backend.test/api")
API_TIMEOUT_SECONDS = 2.0

GRACE_MINUTES = 30
REFRESH_INTERVAL_SECONDS = 60

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
