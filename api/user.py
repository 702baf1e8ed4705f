from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError

from api.deps import get_db
from crud.user import get_user_by_wallet_id, create_user
from schemas.user import UserCreate, UserResponse
from utilities.response import success_response

router = APIRouter(prefix="/users", tags=["users"])

@router.get("/{wallet_id}")
async def get_user(wallet_id: str, db=Depends(get_db)):
    """Get user profile by wallet id"""
    user = await get_user_by_wallet_id(db, wallet_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return success_response(
        data=UserResponse.model_validate(user),
        message="User retrieved"
    )

@router.post("", status_code=status.HTTP_201_CREATED)
async def register_user(payload: UserCreate, db=Depends(get_db)):
    """Create the local profile of a wallet"""
    if await get_user_by_wallet_id(db, payload.wallet_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    try:
        user = await create_user(db, payload)
    except IntegrityError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    return success_response(
        data=UserResponse.model_validate(user),
        message="User created"
    )
