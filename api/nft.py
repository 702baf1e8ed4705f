from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from api.deps import get_nft_service
from config.settings import settings
from core.nft import NFTService
from schemas.nft import NFTCreate
from utilities.middleware import get_client_ip
from utilities.response import success_response

router = APIRouter(prefix="/NFTs", tags=["nfts"])

def _split(values: Optional[str]):
    if values is None:
        return None
    return [value.strip() for value in values.split(",") if value.strip()]

@router.get("")
async def list_nfts(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    listed: Optional[bool] = Query(None, description="1 for listed, 0 for unlisted, omit for both"),
    service: NFTService = Depends(get_nft_service)
):
    """List NFTs, one per serie"""
    result = await service.get_all_nfts(page, limit, listed)
    return success_response(data=result, message="NFTs retrieved successfully")

@router.post("")
async def create_nft(payload: NFTCreate, service: NFTService = Depends(get_nft_service)):
    """Create the local record of an NFT with its categories"""
    nft = await service.create_nft(payload)
    return success_response(data=nft, message="NFT created successfully")

@router.get("/owner/{owner_id}")
async def list_owner_nfts(
    owner_id: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    listed: Optional[bool] = Query(None),
    service: NFTService = Depends(get_nft_service)
):
    result = await service.get_nfts_from_owner(owner_id, page, limit, listed)
    return success_response(data=result, message="NFTs retrieved successfully")

@router.get("/creator/{creator_id}")
async def list_creator_nfts(
    creator_id: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    listed: Optional[bool] = Query(None),
    service: NFTService = Depends(get_nft_service)
):
    result = await service.get_nfts_from_creator(creator_id, page, limit, listed)
    return success_response(data=result, message="NFTs retrieved successfully")

@router.get("/category")
async def list_category_nfts(
    codes: Optional[str] = Query(None, description="Comma separated category codes; omit for uncategorized NFTs"),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    listed: Optional[bool] = Query(None),
    service: NFTService = Depends(get_nft_service)
):
    result = await service.get_nfts_from_categories(_split(codes), page, limit, listed)
    return success_response(data=result, message="NFTs retrieved successfully")

@router.get("/ids")
async def list_nfts_from_ids(
    ids: str = Query(..., description="Comma separated NFT ids"),
    distinct: bool = Query(False),
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    listed: Optional[bool] = Query(None),
    service: NFTService = Depends(get_nft_service)
):
    if distinct:
        result = await service.get_nfts_from_ids_distinct(_split(ids), page, limit, listed)
    else:
        result = await service.get_nfts_from_ids(_split(ids), page, limit, listed)
    return success_response(data=result, message="NFTs retrieved successfully")

@router.get("/stat/{wallet_id}")
async def get_user_stats(wallet_id: str, service: NFTService = Depends(get_nft_service)):
    """Owned/listed/created NFT counts and follow counts of a user"""
    stats = await service.get_stat_nfts_user(wallet_id)
    return success_response(data=stats, message="Stats retrieved")

@router.get("/local/{chain_id}")
async def get_local_nft(chain_id: str, service: NFTService = Depends(get_nft_service)):
    """Local record of an NFT; data is null when it has none"""
    nft = await service.find_mongo_nft_from_id(chain_id)
    return success_response(
        data=nft,
        message="Local NFT retrieved" if nft else "No local record for this NFT"
    )

@router.get("/{nft_id}/series")
async def list_serie_nfts(
    nft_id: str,
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=settings.MAX_PAGE_SIZE),
    service: NFTService = Depends(get_nft_service)
):
    """Every NFT sharing the serie of the given NFT"""
    nft = await service.get_nft(nft_id)
    result = await service.get_nfts_for_serie(nft, page, limit)
    return success_response(data=result, message="Serie retrieved successfully")

@router.get("/{nft_id}")
async def get_nft(
    nft_id: str,
    request: Request,
    inc_views: bool = Query(False, alias="incViews"),
    viewer_wallet_id: Optional[str] = Query(None, alias="viewerWalletId"),
    service: NFTService = Depends(get_nft_service)
):
    """Get specific NFT details, optionally counting a view"""
    nft = await service.get_nft(nft_id, inc_views, viewer_wallet_id, get_client_ip(request))
    return success_response(data=nft, message="NFT retrieved successfully")
