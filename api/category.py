from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_category_service
from core.category import CategoryService
from utilities.response import success_response

router = APIRouter(prefix="/categories", tags=["categories"])

@router.get("")
async def list_categories(service: CategoryService = Depends(get_category_service)):
    categories = await service.get_categories()
    return success_response(
        data=categories,
        message="Categories retrieved"
    )

@router.get("/{code}")
async def get_category(code: str, service: CategoryService = Depends(get_category_service)):
    category = await service.get_category_by_code(code)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return success_response(data=category, message="Category retrieved")
