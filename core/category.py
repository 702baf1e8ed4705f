import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.exceptions import NFTServiceError
from crud import category as crud_category
from schemas.category import CategoryResponse

logger = logging.getLogger(__name__)

class CategoryService:
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def get_categories(self) -> List[CategoryResponse]:
        try:
            async with self.session_factory() as db:
                categories = await crud_category.get_categories(db)
            return [CategoryResponse.model_validate(c) for c in categories]
        except Exception as e:
            logger.error(f"Error getting categories: {e}")
            raise NFTServiceError("Couldn't get categories") from None

    async def get_category_by_code(self, code: str) -> Optional[CategoryResponse]:
        """Category for a code, None when the code is unknown"""
        try:
            async with self.session_factory() as db:
                category = await crud_category.get_category_by_code(db, code)
            return CategoryResponse.model_validate(category) if category else None
        except Exception as e:
            logger.error(f"Error getting category {code}: {e}")
            raise NFTServiceError("Couldn't get category") from None
