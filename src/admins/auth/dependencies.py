import logging

from fastapi import Depends, HTTPException, Request

from src.admins.auth.config import AuthConfig, get_auth_config
from src.admins.auth.jwt_service import JWTService
from src.admins.dtos import AdminClaimsDTO, AdminRole, InvalidCredentialsError

logger = logging.getLogger(__name__)


def get_jwt_service(config: AuthConfig = Depends(get_auth_config)) -> JWTService:
    """Dependency to get the JWT service."""
    return JWTService(config)


async def get_current_admin(
    request: Request,
    config: AuthConfig = Depends(get_auth_config),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AdminClaimsDTO:
    """Claims of the admin whose session cookie came with the request."""
    token = request.cookies.get(config.cookie_name)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        return jwt_service.validate_token(token)
    except InvalidCredentialsError as e:
        logger.warning("Rejected admin session: %s", e.reason)
        raise HTTPException(status_code=401, detail="Not authenticated")


def require_role(role: AdminRole | str):
    """Dependency factory letting only admins with ``role`` through."""
    role = AdminRole(role)

    async def dependency(admin: AdminClaimsDTO = Depends(get_current_admin)) -> AdminClaimsDTO:
        if admin.role != role:
            raise HTTPException(status_code=403, detail="Forbidden")
        return admin

    return dependency
