"""Settings shared by every environment module (read from the process env / .env)."""

import os


def env_bool(name: str, default: str = "0") -> bool:
    return bool(int(os.getenv(name, default)))


def db_config_from_env(*, default_password: str = "") -> dict:
    return {
        "host": os.getenv("DB_HOST", "localhost"),
        "port": int(os.getenv("DB_PORT", "3306")),
        "user": os.getenv("DB_USER", "root"),
        "password": os.getenv("DB_PASSWORD", default_password),
        "database": os.getenv("DB_NAME", "guard_scheduling"),
    }


# Minutes before the expected start that count as "early" rather than "on-time".
EARLY_THRESHOLD_MINUTES = int(os.getenv("EARLY_THRESHOLD_MINUTES", "10"))
