from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Iterable, List, Optional
import logging

from models.category import Category
from schemas.category import CategoryCreate

logger = logging.getLogger(__name__)

async def get_categories(db: AsyncSession) -> List[Category]:
    """Get all categories ordered by code"""
    result = await db.execute(select(Category).order_by(Category.code))
    return list(result.scalars().all())

async def get_category_by_code(db: AsyncSession, code: str) -> Optional[Category]:
    """Get category by code"""
    result = await db.execute(select(Category).where(Category.code == code))
    return result.scalars().first()

async def get_categories_by_codes(db: AsyncSession, codes: Iterable[str]) -> Dict[str, Category]:
    """Map each known code to its category; unknown codes are absent from the mapping"""
    codes = list(set(codes))
    if not codes:
        return {}
    result = await db.execute(select(Category).where(Category.code.in_(codes)))
    return {category.code: category for category in result.scalars().all()}

async def create_category(db: AsyncSession, category_data: CategoryCreate) -> Category:
    """Create new category"""
    try:
        db_category = Category(
            code=category_data.code,
            name=category_data.name,
            description=category_data.description
        )

        db.add(db_category)
        await db.commit()
        await db.refresh(db_category)

        logger.info(f"Created new category: {category_data.code}")
        return db_category

    except Exception as e:
        logger.error(f"Error creating category: {e}")
        await db.rollback()
        raise e
