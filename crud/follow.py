from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from models.follow import Follow

async def count_followers(db: AsyncSession, user_id: int) -> int:
    """Number of users following the given user"""
    result = await db.execute(select(func.count(Follow.id)).where(Follow.followed_id == user_id))
    return result.scalar() or 0

async def count_followed(db: AsyncSession, user_id: int) -> int:
    """Number of users the given user follows"""
    result = await db.execute(select(func.count(Follow.id)).where(Follow.follower_id == user_id))
    return result.scalar() or 0
