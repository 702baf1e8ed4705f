import httpx
import logging
from typing import Any, Dict, Optional, Union

from core.exceptions import IndexerError
from core.queries import GraphQLQuery, NFT_ENTITIES, DISTINCT_SERIE_NFTS
from schemas.nft import (
    NFTListResponse,
    NFTListPaginatedResponse,
    DistinctNFTListResponse,
    DistinctNFTListPaginatedResponse,
)

logger = logging.getLogger(__name__)

class IndexerClient:
    """GraphQL client for the blockchain indexer"""

    def __init__(self, base_url: str, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.base_url = base_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def request(self, query: GraphQLQuery) -> Dict[str, Any]:
        """Execute a query and return its ``data`` member"""
        try:
            response = await self._client.post(self.base_url, json=query.payload())
        except httpx.HTTPError as e:
            raise IndexerError(f"Indexer unreachable: {e}") from e

        if response.status_code != 200:
            logger.error(f"Indexer request failed: {response.status_code} {response.text[:200]}")
            raise IndexerError(f"Indexer answered {response.status_code}")

        payload = response.json()
        if payload.get("errors"):
            logger.error(f"Indexer query errors: {payload['errors']}")
            raise IndexerError("Indexer returned errors")
        data = payload.get("data")
        if not data:
            raise IndexerError("Indexer returned no data")
        return data

    async def get_nfts(self, query: GraphQLQuery) -> Union[
        NFTListResponse, NFTListPaginatedResponse, DistinctNFTListResponse, DistinctNFTListPaginatedResponse
    ]:
        """Execute a list query and parse the envelope it returns"""
        data = await self.request(query)
        if DISTINCT_SERIE_NFTS in data:
            connection = data[DISTINCT_SERIE_NFTS]
            paginated, plain = DistinctNFTListPaginatedResponse, DistinctNFTListResponse
        elif NFT_ENTITIES in data:
            connection = data[NFT_ENTITIES]
            paginated, plain = NFTListPaginatedResponse, NFTListResponse
        else:
            raise IndexerError("Unexpected indexer envelope")
        if not isinstance(connection, dict):
            raise IndexerError("Malformed indexer envelope")
        if "pageInfo" in connection:
            return paginated.model_validate(connection)
        return plain.model_validate(connection)

    async def count(self, query: GraphQLQuery) -> int:
        data = await self.request(query)
        try:
            return int(data[NFT_ENTITIES]["totalCount"])
        except (KeyError, TypeError, ValueError) as e:
            raise IndexerError("Malformed count envelope") from e

    async def aclose(self):
        await self._client.aclose()
