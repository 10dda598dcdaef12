"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── Application ───────────────────────────────────────────
APP_ENV: str = os.getenv("APP_ENV", "development")
SECRET_KEY: str = os.getenv("SECRET_KEY", "secret-dev")
PORT: int = int(os.getenv("PORT", "3001"))

# Speed up bcrypt during tests, since the algorithm safety isn't being tested
BCRYPT_WORK_FACTOR: int = 1 if APP_ENV == "test" else 12

# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "jobly")
DB_TEST_NAME: str = os.getenv("DB_TEST_NAME", "jobly_test")
DB_USER: str = os.getenv("DB_USER", "jobly_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))


def get_database_url() -> str:
    """
    Build the PostgreSQL DSN for the current environment.

    Reads the environment at call time so tests can switch APP_ENV.
    The test environment uses DB_TEST_NAME; production requires SSL.
    """
    env = os.getenv("APP_ENV", "development")
    user = os.getenv("DB_USER", DB_USER)
    password = os.getenv("DB_PASS", DB_PASS)
    host = os.getenv("DB_HOST", DB_HOST)
    port = int(os.getenv("DB_PORT", str(DB_PORT)))

    if env == "test":
        name = os.getenv("DB_TEST_NAME", DB_TEST_NAME)
    else:
        name = os.getenv("DB_NAME", DB_NAME)

    url = f"postgresql://{user}:{password}@{host}:{port}/{name}"
    if env == "production":
        url += "?sslmode=require"
    return url


DATABASE_URL: str = get_database_url()
