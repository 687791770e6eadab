from datetime import timedelta

from pydantic import BaseModel

from config import ApplicationConfig
from src.api.utils.expiration import humanize_expiration, parse_expiration


class ResetSettings(BaseModel):
    """Tunables of the password reset workflow"""

    token_expires_in: str = "5m"
    frontend_url: str = "http://localhost:3000"
    reset_password_path: str = "reset-password?token"
    system_name: str = "OxyPass"
    password_min_length: int = 6
    password_max_length: int = 200

    @classmethod
    def from_config(cls, config=ApplicationConfig) -> "ResetSettings":
        return cls(
            token_expires_in=config.RESET_TOKEN_EXPIRES_IN,
            frontend_url=config.FRONTEND_URL,
            reset_password_path=config.RESET_PASSWORD_PATH,
            system_name=config.SYSTEM_NAME,
            password_min_length=config.PASSWORD_MIN_LENGTH,
            password_max_length=config.PASSWORD_MAX_LENGTH,
        )

    @property
    def token_lifetime(self) -> timedelta:
        return parse_expiration(self.token_expires_in)

    @property
    def token_lifetime_text(self) -> str:
        return humanize_expiration(self.token_expires_in)

    def reset_link(self, token: str) -> str:
        # FRONTEND_URL may list several origins; links use the first
        frontend = self.frontend_url.split(",")[0].strip().rstrip("/")
        return f"{frontend}/{self.reset_password_path}={token}"
