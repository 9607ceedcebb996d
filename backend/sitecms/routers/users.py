"""Users API router: public profiles and the caller's own profile."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sitecms.database import get_db
from sitecms.middleware.auth_middleware import get_current_user, get_optional_user
from sitecms.models.user import User
from sitecms.schemas.user import MessageUserEnvelope, ProfileUpdate, PublicProfileOut, UserEnvelope, UserOut
from sitecms.services import user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile/{user_id}")
def public_profile(
    user_id: int,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    user = user_service.get_public_profile(db, user_id)
    if viewer is not None and viewer.user_id == user.user_id:
        return {"user": UserOut.model_validate(user).model_dump(mode="json"), "is_self": True}
    return {"user": PublicProfileOut.model_validate(user).model_dump(mode="json"), "is_self": False}


@router.get("/me/profile", response_model=UserEnvelope)
def my_profile(current_user: User = Depends(get_current_user)):
    return {"user": current_user}


@router.put("/me/profile", response_model=MessageUserEnvelope)
def update_my_profile(
    data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    user = user_service.update_profile(db, current_user, data)
    return {"message": "Profile updated successfully", "user": user}
