from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime
from typing import List, Optional
import logging

from models.nft_view import NFTView

logger = logging.getLogger(__name__)

async def get_views(db: AsyncSession, viewed_serie: str = None, viewed_id: str = None) -> List[NFTView]:
    """Views recorded for a serie, or for a single NFT when no serie is given"""
    query = select(NFTView)
    if viewed_serie is not None:
        query = query.where(NFTView.viewed_serie == viewed_serie)
    else:
        query = query.where(NFTView.viewed_id == viewed_id)
    result = await db.execute(query.order_by(NFTView.date))
    return list(result.scalars().all())

async def create_view(
    db: AsyncSession,
    viewed_id: str,
    viewed_serie: str,
    viewer_ip: str,
    date: datetime,
    viewer: Optional[str] = None,
) -> NFTView:
    """Record a view event"""
    try:
        view = NFTView(
            viewed_id=viewed_id,
            viewed_serie=viewed_serie,
            viewer=viewer,
            viewer_ip=viewer_ip,
            date=date
        )
        db.add(view)
        await db.commit()
        return view

    except Exception as e:
        logger.error(f"Error recording view for NFT {viewed_id}: {e}")
        await db.rollback()
        raise e
