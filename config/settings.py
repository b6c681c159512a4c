import os


def env_bool(name, default="false"):
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


SECRET_KEY = os.getenv("SECRET_KEY", "insecure_key_for_dev")
DEBUG = env_bool("FLASK_DEBUG")

SERVER_NAME = os.getenv("SERVER_NAME")

# SQLAlchemy.
pg_user = os.getenv("POSTGRES_USER", "alertlab")
pg_pass = os.getenv("POSTGRES_PASSWORD", "password")
pg_host = os.getenv("POSTGRES_HOST", "postgres")
pg_port = os.getenv("POSTGRES_PORT", "5432")
pg_db = os.getenv("POSTGRES_DB", pg_user)
db = f"postgresql+psycopg://{pg_user}:{pg_pass}@{pg_host}:{pg_port}/{pg_db}"
SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", db)
SQLALCHEMY_TRACK_MODIFICATIONS = False

# Redis.
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

# Peanuts character cache.
PEANUTS_CACHE_TYPE = os.getenv("PEANUTS_CACHE_TYPE", "redis")
PEANUTS_CACHE_KEY_PREFIX = os.getenv("PEANUTS_CACHE_KEY_PREFIX", "peanuts::")
# Seconds a cached character is kept in Redis, 0 keeps it until overwritten.
PEANUTS_CACHE_TTL = int(os.getenv("PEANUTS_CACHE_TTL", "0"))
# When true a failing cache backend degrades lookups to the database.
PEANUTS_CACHE_FAIL_OPEN = env_bool("PEANUTS_CACHE_FAIL_OPEN")

# Chain endpoint.
TARGET_ONE_HOST = os.getenv("TARGET_ONE_HOST", "localhost")
TARGET_TWO_HOST = os.getenv("TARGET_TWO_HOST", "localhost")
CHAIN_PORT = int(os.getenv("CHAIN_PORT", os.getenv("PORT", "8000")))
CHAIN_TIMEOUT = float(os.getenv("CHAIN_TIMEOUT", "5"))

# Simulated latency.
IO_TASK_SECONDS = float(os.getenv("IO_TASK_SECONDS", "1.0"))
RANDOM_SLEEP_MAX_SECONDS = float(os.getenv("RANDOM_SLEEP_MAX_SECONDS", "2.0"))
RANDOM_SEED = os.getenv("RANDOM_SEED")

# CloudWatch.
CLOUDWATCH_ENABLED = env_bool("CLOUDWATCH_ENABLED")
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
CLOUDWATCH_LOG_GROUP = os.getenv("CLOUDWATCH_LOG_GROUP", "alertlab")
CLOUDWATCH_LOG_STREAM = os.getenv("CLOUDWATCH_LOG_STREAM", "error-logs")
CLOUDWATCH_LOG_LEVEL = os.getenv("CLOUDWATCH_LOG_LEVEL", "ERROR")
