from fastapi import Request

from core.category import CategoryService
from core.nft import NFTService

def get_nft_service(request: Request) -> NFTService:
    return request.app.state.nft_service

def get_category_service(request: Request) -> CategoryService:
    return request.app.state.category_service

async def get_db(request: Request):
    """Dependency to get database session"""
    async with request.app.state.session_factory() as session:
        yield session
