import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Reporting backend (REST). All hourly/daily-target data lives there.
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:5000/api")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "15"))

GRACE_MINUTES = int(os.getenv("GRACE_MINUTES", "30"))
REFRESH_INTERVAL_SECONDS = int(os.getenv("REFRESH_INTERVAL_SECONDS", "60"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
