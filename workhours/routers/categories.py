"""Category router - default and custom work categories."""
from fastapi import APIRouter, Depends, HTTPException, status

from workhours.database import get_database
from workhours.models.category import CategoryCreate, CategoryList
from workhours.routers.auth import get_current_user_id
from workhours.services.category_service import CategoryService


router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryList)
async def list_categories(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """List default categories and the user's custom ones."""
    service = CategoryService(db)
    return await service.list_categories(user_id)


@router.post("", response_model=CategoryList, status_code=status.HTTP_201_CREATED)
async def add_category(
    category: CategoryCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Add a custom category."""
    service = CategoryService(db)
    try:
        return await service.add_category(user_id, category.name)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{name}", response_model=CategoryList)
async def remove_category(
    name: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Remove a custom category.

    - Default categories cannot be removed (400)
    """
    service = CategoryService(db)
    try:
        return await service.remove_category(user_id, name)
    except ValueError as e:
        code = status.HTTP_404_NOT_FOUND if "not found" in str(e) else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=str(e))
