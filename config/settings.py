import os


def str_to_bool(value):
    """
    Convert a truthy/falsy environment string to a bool.

    :param value: String such as "true", "0", "yes"
    :return: bool
    """
    value = str(value).strip().lower()
    if value in ("y", "yes", "t", "true", "on", "1"):
        return True
    if value in ("n", "no", "f", "false", "off", "0", ""):
        return False
    raise ValueError(f"invalid truth value {value!r}")


SECRET_KEY = os.getenv("SECRET_KEY", "insecure-dev-key")
DEBUG = str_to_bool(os.getenv("FLASK_DEBUG", "false"))

# Reported by /health, /api and /api/info.
APP_ENV = os.getenv("APP_ENV", os.getenv("FLASK_ENV", "development"))
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
PORT = int(os.getenv("PORT", "8080"))

# Fault injection.
FAULT_INITIAL_RATE = float(os.getenv("FAULT_INITIAL_RATE", "0.0"))
FAULT_RANDOM_SEED = os.getenv("FAULT_RANDOM_SEED") or None
CPU_BURN_DEFAULT_MS = int(os.getenv("CPU_BURN_DEFAULT_MS", "3000"))
CPU_BURN_MAX_MS = int(os.getenv("CPU_BURN_MAX_MS", "120000"))

# Prometheus.
METRICS_PROCESS_COLLECTORS = str_to_bool(
    os.getenv("METRICS_PROCESS_COLLECTORS", "true")
)

# Logging.
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SERVICE_NAME = os.getenv("SERVICE_NAME", "pulse-demo")

# CloudWatch Logs (off for local dev).
CLOUDWATCH_ENABLED = str_to_bool(os.getenv("CLOUDWATCH_ENABLED", "false"))
AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
CLOUDWATCH_LOG_GROUP = os.getenv("CLOUDWATCH_LOG_GROUP", "pulse-demo")
CLOUDWATCH_LOG_STREAM = os.getenv("CLOUDWATCH_LOG_STREAM", "error-logs")
CLOUDWATCH_LOG_LEVEL = os.getenv("CLOUDWATCH_LOG_LEVEL", "ERROR")
