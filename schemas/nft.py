from pydantic import BaseModel, ConfigDict, Field
from typing import ClassVar, List, Optional, Union

from schemas.category import CategoryResponse

# Serie id the indexer uses for NFTs that are not part of a series
NO_SERIE = "0"

class IndexerNFT(BaseModel):
    """NFT node as returned by the indexer"""
    id: str
    owner: str
    creator: str
    listed: int = 0
    serie_id: str = Field(NO_SERIE, alias="serieId")
    timestamp_list: Optional[str] = Field(None, alias="timestampList")
    uri: Optional[str] = None
    price: Optional[str] = None
    price_tiime: Optional[str] = Field(None, alias="priceTiime")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

class NFTResponse(IndexerNFT):
    """Indexer NFT merged with local enrichment"""
    categories: Optional[List[CategoryResponse]] = None
    views_count: Optional[int] = Field(None, alias="viewsCount")

class PageInfo(BaseModel):
    has_next_page: bool = Field(False, alias="hasNextPage")
    has_previous_page: bool = Field(False, alias="hasPreviousPage")

    model_config = ConfigDict(populate_by_name=True)

# Indexer envelopes

class NFTListResponse(BaseModel):
    distinct: ClassVar[bool] = False

    total_count: int = Field(0, alias="totalCount")
    nodes: List[NFTResponse] = []

    model_config = ConfigDict(populate_by_name=True)

class NFTListPaginatedResponse(NFTListResponse):
    page_info: PageInfo = Field(alias="pageInfo")

class DistinctNFTListResponse(NFTListResponse):
    distinct: ClassVar[bool] = True

class DistinctNFTListPaginatedResponse(NFTListPaginatedResponse):
    distinct: ClassVar[bool] = True

NFTList = Union[NFTListResponse, NFTListPaginatedResponse]
DistinctNFTList = Union[DistinctNFTListResponse, DistinctNFTListPaginatedResponse]

# Local enrichment records

class NFTCreate(BaseModel):
    chain_id: str = Field(alias="chainId")
    categories: List[str] = []

    model_config = ConfigDict(populate_by_name=True)

class LocalNFTResponse(BaseModel):
    id: int
    chain_id: str = Field(serialization_alias="chainId")
    # Unresolved category codes stay as empty slots
    categories: List[Optional[CategoryResponse]] = []

    model_config = ConfigDict(from_attributes=True)
