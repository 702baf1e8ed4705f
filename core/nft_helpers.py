import asyncio
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Iterable, List, Optional

from models.nft import NFT
from schemas.category import CategoryResponse
from schemas.nft import NFTResponse, NFTListResponse, NO_SERIE

def merge_local_record(nft: NFTResponse, local: Optional[NFT]) -> NFTResponse:
    """Attach locally stored enrichment to an indexer NFT"""
    categories = []
    if local is not None:
        categories = [
            CategoryResponse.model_validate(category)
            for category in local.categories
            if category is not None
        ]
    return nft.model_copy(update={"categories": categories})

def distinct_by_serie(nodes: Iterable[NFTResponse]) -> List[NFTResponse]:
    """Keep the first NFT of each serie; NFTs outside a serie are never collapsed"""
    seen = set()
    distinct = []
    for nft in nodes:
        if nft.serie_id != NO_SERIE:
            if nft.serie_id in seen:
                continue
            seen.add(nft.serie_id)
        distinct.append(nft)
    return distinct

async def populate_result(
    result: NFTListResponse,
    populate: Callable[[NFTResponse], Awaitable[NFTResponse]],
) -> NFTListResponse:
    """Enrich every node concurrently; the first failure aborts the batch"""
    nodes = result.nodes
    if result.distinct:
        nodes = distinct_by_serie(nodes)
    nodes = await asyncio.gather(*(populate(nft) for nft in nodes))
    return result.model_copy(update={"nodes": list(nodes)})

def is_new_view(views, viewer_ip: Optional[str], now: datetime, cooldown: timedelta) -> bool:
    """A view counts when this address has not viewed within the cooldown window"""
    if not viewer_ip:
        return False
    last_seen = max((view.date for view in views if view.viewer_ip == viewer_ip), default=None)
    return last_seen is None or now - last_seen > cooldown
