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
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")

    # Password reset
    JWT_RESET_SECRET = data.get("JWT_RESET_SECRET", "dev-reset-secret-change-in-production")
    RESET_TOKEN_EXPIRES_IN = data.get("RESET_TOKEN_EXPIRES_IN", "5m")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:3000")
    RESET_PASSWORD_PATH = data.get("RESET_PASSWORD_PATH", "reset-password?token")
    SYSTEM_NAME = data.get("SYSTEM_NAME", "OxyPass")
    PASSWORD_MIN_LENGTH = int(data.get("PASSWORD_MIN_LENGTH", 6))
    PASSWORD_MAX_LENGTH = int(data.get("PASSWORD_MAX_LENGTH", 200))

    # Outbound calls
    REMOTE_TIMEOUT_SECONDS = float(data.get("REMOTE_TIMEOUT_SECONDS", 30))
    REMOTE_VERIFY_TLS = bool(data.get("REMOTE_VERIFY_TLS", True))
    MAIL_GATEWAY_URL = data.get("MAIL_GATEWAY_URL", "https://mail-gateway.local/email/send")
    MAIL_TIMEOUT_SECONDS = float(data.get("MAIL_TIMEOUT_SECONDS", 30))
    # Overrides for the gateway JSON keys, e.g. {"subject": "subject", "body": "message"}
    MAIL_FIELD_NAMES = data.get("MAIL_FIELD_NAMES") or {}
