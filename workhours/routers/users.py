"""User router - profile updates and account deletion."""
from fastapi import APIRouter, Depends, HTTPException, status

from workhours.database import get_database
from workhours.models.user import User, UserUpdate
from workhours.routers.auth import get_current_user_id
from workhours.services.auth_service import AuthService


router = APIRouter(prefix="/users", tags=["users"])


def _ensure_self(user_id: str, current_user_id: str) -> None:
    if user_id != current_user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    user_update: UserUpdate,
    current_user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Update the authenticated user's profile.

    - Users may only update themselves (403 otherwise)
    - Email must stay unique (400)
    """
    _ensure_self(user_id, current_user_id)
    service = AuthService(db)

    try:
        return await service.update_user(user_id, user_update)
    except ValueError as e:
        code = status.HTTP_404_NOT_FOUND if "not found" in str(e) else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=str(e))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete the authenticated user's account and all their data.

    - Users may only delete themselves (403 otherwise)
    - Removes work entries, clients and custom categories too
    """
    _ensure_self(user_id, current_user_id)
    service = AuthService(db)

    try:
        return await service.delete_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
