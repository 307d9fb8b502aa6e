from datetime import UTC, datetime, timedelta

import jwt

from src.admins.auth.config import AuthConfig
from src.admins.dtos import AdminClaimsDTO, AdminRole, InvalidCredentialsError


class JWTService:
    """Issues and checks the signed session tokens stored in the admin cookie."""

    def __init__(self, config: AuthConfig) -> None:
        self.config = config

    def generate_token(self, email: str, name: str, role: AdminRole | str) -> str:
        now = datetime.now(UTC)
        payload = {
            "email": email,
            "name": name,
            "role": AdminRole(role).value,
            "iss": self.config.issuer,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=self.config.token_lifetime_minutes),
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    def validate_token(self, token: str) -> AdminClaimsDTO:
        """Decode ``token``, raising InvalidCredentialsError if it is not one we issued."""
        try:
            payload = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[self.config.algorithm],
                issuer=self.config.issuer,
                options={"require": ["exp", "iss", "email", "role"]},
            )
            role = AdminRole(payload["role"])
        except (jwt.PyJWTError, ValueError) as e:
            raise InvalidCredentialsError(f"invalid token: {e}") from e

        return AdminClaimsDTO(
            email=payload["email"],
            name=payload.get("name", ""),
            role=role,
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
        )
