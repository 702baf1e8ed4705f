from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from typing import Optional, List
import logging

from models.category import Category
from models.nft import NFT, NFTCategory

logger = logging.getLogger(__name__)

async def get_nft_by_chain_id(db: AsyncSession, chain_id: str) -> Optional[NFT]:
    """Get local NFT record by chain id, categories loaded"""
    result = await db.execute(
        select(NFT)
        .options(selectinload(NFT.category_links).selectinload(NFTCategory.category))
        .where(NFT.chain_id == chain_id)
    )
    return result.scalars().first()

async def get_categorized_chain_ids(db: AsyncSession) -> List[str]:
    """Chain ids of NFTs linked to at least one existing category"""
    result = await db.execute(
        select(NFT.chain_id)
        .join(NFTCategory, NFTCategory.nft_id == NFT.id)
        .where(NFTCategory.category_id.isnot(None))
        .distinct()
    )
    return list(result.scalars().all())

async def get_chain_ids_for_categories(db: AsyncSession, category_ids: List[int]) -> List[str]:
    """Chain ids of NFTs tagged with any of the given categories"""
    if not category_ids:
        return []
    result = await db.execute(
        select(NFT.chain_id)
        .join(NFTCategory, NFTCategory.nft_id == NFT.id)
        .where(NFTCategory.category_id.in_(category_ids))
        .distinct()
    )
    return list(result.scalars().all())

async def create_nft(db: AsyncSession, chain_id: str, categories: List[Optional[Category]]) -> NFT:
    """Create new local NFT record; None entries are kept as empty category slots"""
    try:
        db_nft = NFT(
            chain_id=chain_id,
            category_links=[NFTCategory(category=category) for category in categories]
        )

        db.add(db_nft)
        await db.commit()

        logger.info(f"Created local NFT record: {chain_id}")
        return db_nft

    except Exception as e:
        logger.error(f"Error creating NFT: {e}")
        await db.rollback()
        raise e
