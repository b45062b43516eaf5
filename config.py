import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Subscription lifecycle
    TRIAL_DURATION_DAYS = int(data.get("TRIAL_DURATION_DAYS", 14))
    GRACE_PERIOD_DAYS = int(data.get("GRACE_PERIOD_DAYS", 3))
    TRIAL_PLAN_TIER = data.get("TRIAL_PLAN_TIER", "starter")  # Trial runs with starter limits
    ALERT_TRIAL_WARNING_DAYS = int(data.get("ALERT_TRIAL_WARNING_DAYS", 3))
