from dataclasses import dataclass, field
from functools import lru_cache

from src.config.settings import Settings, settings


@dataclass(frozen=True)
class AuthConfig:
    """Admin authentication settings, built once at start-up."""

    secret_key: str
    algorithm: str = "HS256"
    token_lifetime_minutes: int = 60 * 24
    issuer: str = "event-rsvp"
    cookie_name: str = "admin_token"
    allowed_emails: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            token_lifetime_minutes=settings.access_token_expire_minutes,
            issuer=settings.token_issuer,
            cookie_name=settings.auth_cookie_name,
            allowed_emails=frozenset(
                email.strip().lower() for email in settings.admin_email_whitelist if email.strip()
            ),
        )

    @property
    def cookie_max_age(self) -> int:
        return self.token_lifetime_minutes * 60

    def is_allowed_email(self, email: str) -> bool:
        return email.strip().lower() in self.allowed_emails


@lru_cache
def get_auth_config() -> AuthConfig:
    return AuthConfig.from_settings(settings)
