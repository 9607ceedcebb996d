"""Auth API router: register, login, logout and the current user's account."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from sitecms.database import get_db
from sitecms.deps import get_credential_store, get_token_issuer
from sitecms.middleware.auth_middleware import get_current_user
from sitecms.models.user import User
from sitecms.schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageUserEnvelope,
    PasswordChangeRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenRefreshResponse,
    UserEnvelope,
    UserOut,
)
from sitecms.services import auth_service, user_service
from sitecms.services.credential_store import CredentialStore
from sitecms.services.token_service import TokenIssuer

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _session_response(issuer: TokenIssuer, user: User, message: str, status_code: int = 200) -> JSONResponse:
    token = issuer.issue(user.user_id)
    body = AuthResponse(message=message, user=UserOut.model_validate(user), token=token)
    response = JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
    issuer.set_session_cookie(response, token)
    return response


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = auth_service.register(db, store, data)
    return _session_response(issuer, user, "User registered successfully", status.HTTP_201_CREATED)


@router.post("/login", response_model=AuthResponse)
def login(
    data: LoginRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = auth_service.login(db, store, data)
    return _session_response(issuer, user, "Login successful")


@router.post("/logout")
def logout(issuer: TokenIssuer = Depends(get_token_issuer)):
    response = JSONResponse({"message": "Logged out successfully"})
    issuer.clear_session_cookie(response)
    return response


@router.get("/me", response_model=UserEnvelope)
def me(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.put("/me", response_model=MessageUserEnvelope)
def update_me(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = user_service.update_profile(db, current_user, data)
    return {"message": "Profile updated successfully", "user": user}


@router.put("/change-password")
def change_password(
    data: PasswordChangeRequest,
    db: Session = Depends(get_db),
    store: CredentialStore = Depends(get_credential_store),
    current_user: User = Depends(get_current_user),
):
    auth_service.change_password(db, store, current_user, data)
    return {"message": "Password changed successfully"}


@router.post("/refresh", response_model=TokenRefreshResponse)
def refresh(
    current_user: User = Depends(get_current_user),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    token = issuer.issue(current_user.user_id)
    response = JSONResponse(TokenRefreshResponse(message="Token refreshed successfully", token=token).model_dump())
    issuer.set_session_cookie(response, token)
    return response
