from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel

from src.admins.auth.config import AuthConfig, get_auth_config
from src.admins.auth.dependencies import get_current_admin, get_jwt_service
from src.admins.auth.jwt_service import JWTService
from src.admins.dtos import AdminClaimsDTO, AdminRole, InvalidCredentialsError
from src.admins.features.login.write_model import (
    AdminLoginWriteModel,
    RepositoryAdminLoginWriteModel,
)
from src.admins.repository.read_models import SqlAdminReadModel
from src.admins.repository.write_models import SqlAdminWriteModel
from src.admins.urls import LOGIN_URL, LOGOUT_URL, ME_URL
from src.guests.dtos import StorageUnavailableError

router = APIRouter()


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class AdminResponse(BaseModel):
    email: str
    name: str
    role: AdminRole


class LogoutResponse(BaseModel):
    success: bool


def get_login_write_model(
    config: AuthConfig = Depends(get_auth_config),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> AdminLoginWriteModel:
    """Dependency to get the admin login write model."""
    return RepositoryAdminLoginWriteModel(
        config=config,
        jwt_service=jwt_service,
        read_model=SqlAdminReadModel(),
        write_model=SqlAdminWriteModel(),
    )


def _is_secure(request: Request) -> bool:
    return request.url.scheme == "https" or request.headers.get("x-forwarded-proto") == "https"


@router.post(LOGIN_URL, response_model=AdminResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    config: AuthConfig = Depends(get_auth_config),
    write_model: AdminLoginWriteModel = Depends(get_login_write_model),
) -> AdminResponse:
    """
    Log an admin in and set the session cookie.
    Every failure gets the same answer so callers can't discover which accounts exist.
    """
    try:
        session = await write_model.login(credentials.email, credentials.password)
    except InvalidCredentialsError:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    except StorageUnavailableError:
        raise HTTPException(status_code=503, detail="Authentication failed")

    response.set_cookie(
        key=config.cookie_name,
        value=session.token,
        max_age=config.cookie_max_age,
        path="/",
        httponly=True,
        secure=_is_secure(request),
        samesite="strict",
    )
    return AdminResponse(email=session.admin.email, name=session.admin.name, role=session.admin.role)


@router.post(LOGOUT_URL, response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    config: AuthConfig = Depends(get_auth_config),
) -> LogoutResponse:
    response.delete_cookie(
        key=config.cookie_name,
        path="/",
        httponly=True,
        secure=_is_secure(request),
        samesite="strict",
    )
    return LogoutResponse(success=True)


@router.get(ME_URL, response_model=AdminResponse)
async def me(admin: AdminClaimsDTO = Depends(get_current_admin)) -> AdminResponse:
    return AdminResponse(email=admin.email, name=admin.name, role=admin.role)
