from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from models.user import User
from schemas.user import UserCreate

logger = logging.getLogger(__name__)

async def get_user_by_wallet_id(db: AsyncSession, wallet_id: str) -> Optional[User]:
    """Get user by wallet id"""
    result = await db.execute(select(User).where(User.wallet_id == wallet_id))
    return result.scalars().first()

async def create_user(db: AsyncSession, user_data: UserCreate) -> User:
    """Create new user"""
    try:
        db_user = User(
            wallet_id=user_data.wallet_id,
            name=user_data.name,
            custom_url=user_data.custom_url,
            bio=user_data.bio,
            twitter_name=user_data.twitter_name,
            picture=user_data.picture,
            banner=user_data.banner
        )

        db.add(db_user)
        await db.commit()
        await db.refresh(db_user)

        logger.info(f"Created new user: {user_data.wallet_id}")
        return db_user

    except Exception as e:
        logger.error(f"Error creating user: {e}")
        await db.rollback()
        raise e
