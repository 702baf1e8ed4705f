import asyncio
import logging
import weakref
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from config.settings import settings
from core import queries
from core.exceptions import (
    NFTServiceError,
    NFTNotCreatedError,
    LocalNFTLookupError,
    UserNotFoundError,
)
from core.indexer import IndexerClient
from core.nft_helpers import merge_local_record, populate_result, is_new_view
from core.queries import GraphQLQuery
from crud import category as crud_category
from crud import follow as crud_follow
from crud import nft as crud_nft
from crud import nft_view as crud_nft_view
from crud import user as crud_user
from schemas.nft import (
    NFTResponse,
    NFTList,
    NFTListResponse,
    DistinctNFTList,
    NFTCreate,
    LocalNFTResponse,
    NO_SERIE,
)
from schemas.user import UserStatsResponse

logger = logging.getLogger(__name__)

class NFTService:
    """Merges indexer NFTs with the locally stored enrichment data.

    Every public method catches failures at its boundary, logs the cause and
    raises an ``NFTServiceError`` with a fixed user facing message.
    """

    def __init__(
        self,
        indexer: IndexerClient,
        session_factory: async_sessionmaker,
        view_cooldown: Optional[timedelta] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.indexer = indexer
        self.session_factory = session_factory
        self.view_cooldown = view_cooldown or timedelta(seconds=settings.TIME_BETWEEN_SAME_USER_VIEWS)
        self.clock = clock
        # One lock per (subject, viewer address) while a view is being recorded
        self._view_locks = weakref.WeakValueDictionary()

    async def _populate_nft(self, nft: NFTResponse) -> NFTResponse:
        async with self.session_factory() as db:
            local = await crud_nft.get_nft_by_chain_id(db, nft.id)
        return merge_local_record(nft, local)

    async def _get_populated(self, query: GraphQLQuery, error_message: str):
        try:
            result = await self.indexer.get_nfts(query)
            return await populate_result(result, self._populate_nft)
        except Exception as e:
            logger.error(f"{error_message}: {e}")
            raise NFTServiceError(error_message) from None

    async def get_all_nfts(self, page=None, limit=None, listed: Optional[bool] = None) -> DistinctNFTList:
        """Requests all NFTs from the blockchain, one per serie"""
        return await self._get_populated(queries.all_nfts(limit, page, listed), "Couldn't get NFTs")

    async def get_nft(
        self,
        nft_id: str,
        inc_views: bool = False,
        viewer_wallet_id: Optional[str] = None,
        viewer_ip: Optional[str] = None,
    ) -> NFTResponse:
        """Requests a single NFT, optionally counting the request as a view.

        Without ``viewer_ip`` no view is ever recorded but the current count is
        still returned.
        """
        try:
            result = await self.indexer.get_nfts(queries.nft_from_id(nft_id))
            if not result.nodes:
                raise LookupError(f"NFT {nft_id} not found on indexer")
            nft = await self._populate_nft(result.nodes[0])
            views_count = 0
            if inc_views:
                views_count = await self._count_views(nft, viewer_wallet_id, viewer_ip)
            return nft.model_copy(update={"views_count": views_count})
        except Exception as e:
            logger.error(f"Error getting NFT {nft_id}: {e}")
            raise NFTServiceError("Couldn't get NFT") from None

    async def _count_views(self, nft: NFTResponse, viewer_wallet_id: Optional[str], viewer_ip: Optional[str]) -> int:
        # Views are shared by every NFT of a serie
        viewed_serie = nft.serie_id if nft.serie_id != NO_SERIE else None
        if not viewer_ip:
            async with self.session_factory() as db:
                views = await crud_nft_view.get_views(db, viewed_serie=viewed_serie, viewed_id=nft.id)
            return len(views)

        key = (viewed_serie or f"id:{nft.id}", viewer_ip)
        lock = self._view_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._view_locks[key] = lock

        async with lock:
            async with self.session_factory() as db:
                views = await crud_nft_view.get_views(db, viewed_serie=viewed_serie, viewed_id=nft.id)
                now = self.clock()
                if not is_new_view(views, viewer_ip, now, self.view_cooldown):
                    return len(views)
                await crud_nft_view.create_view(
                    db,
                    viewed_id=nft.id,
                    viewed_serie=nft.serie_id,
                    viewer=viewer_wallet_id,
                    viewer_ip=viewer_ip,
                    date=now,
                )
                return len(views) + 1

    async def get_nfts_from_owner(self, owner_id: str, page=None, limit=None, listed: Optional[bool] = None) -> DistinctNFTList:
        """Gets all NFTs owned by a user"""
        return await self._get_populated(
            queries.nfts_from_owner_id(owner_id, limit, page, listed), "Couldn't get user's owned NFTs"
        )

    async def get_nfts_from_creator(self, creator_id: str, page=None, limit=None, listed: Optional[bool] = None) -> DistinctNFTList:
        """Gets all NFTs created by a user"""
        return await self._get_populated(
            queries.nfts_from_creator_id(creator_id, limit, page, listed), "Couldn't get creator's NFTs"
        )

    async def get_stat_nfts_user(self, wallet_id: str) -> UserStatsResponse:
        """Owned, listed, unlisted and created counts from the indexer, follow counts from the database"""
        try:
            async with self.session_factory() as db:
                user = await crud_user.get_user_by_wallet_id(db, wallet_id)
            if not user:
                raise UserNotFoundError(wallet_id)

            (
                count_owned,
                count_owned_listed,
                count_owned_unlisted,
                count_created,
                count_followers,
                count_followed,
            ) = await asyncio.gather(
                self.indexer.count(queries.count_owner_owned(wallet_id)),
                self.indexer.count(queries.count_owner_owned_listed(wallet_id)),
                self.indexer.count(queries.count_owner_owned_unlisted(wallet_id)),
                self.indexer.count(queries.count_created(wallet_id)),
                self._count_follows(crud_follow.count_followers, user.id),
                self._count_follows(crud_follow.count_followed, user.id),
            )
            return UserStatsResponse(
                count_owned=count_owned,
                count_owned_listed=count_owned_listed,
                count_owned_unlisted=count_owned_unlisted,
                count_created=count_created,
                count_followers=count_followers,
                count_followed=count_followed,
            )
        except UserNotFoundError:
            logger.warning(f"User not found in db: {wallet_id}")
            raise NFTServiceError("Couldn't get users stat") from None
        except Exception as e:
            logger.error(f"Error getting stats for {wallet_id}: {e}")
            raise NFTServiceError("Couldn't get users stat") from None

    async def _count_follows(self, count, user_id: int) -> int:
        async with self.session_factory() as db:
            return await count(db, user_id)

    async def get_nfts_from_ids(self, ids: List[str], page=None, limit=None, listed: Optional[bool] = None) -> NFTList:
        """Returns the NFTs matching the given ids; unknown ids are simply absent"""
        return await self._get_populated(
            queries.nfts_from_ids(ids, limit, page, listed), "Couldn't get NFTs from ids"
        )

    async def get_nfts_from_ids_distinct(self, ids: List[str], page=None, limit=None, listed: Optional[bool] = None) -> DistinctNFTList:
        return await self._get_populated(
            queries.nfts_from_ids(ids, limit, page, listed, distinct=True), "Couldn't get NFTs from ids"
        )

    async def get_nfts_not_in_ids(self, ids: List[str], page=None, limit=None, listed: Optional[bool] = None) -> DistinctNFTList:
        return await self._get_populated(
            queries.nfts_not_in_ids(ids, limit, page, listed), "Couldn't get NFTs not in ids"
        )

    async def get_nfts_from_categories(
        self,
        codes: Optional[List[str]],
        page=None,
        limit=None,
        listed: Optional[bool] = None,
    ) -> DistinctNFTList:
        """Gets NFTs tagged with any of the given category codes.

        With ``codes=None`` returns every NFT without a category instead.
        Unknown codes are ignored.
        """
        try:
            async with self.session_factory() as db:
                if codes is None:
                    categorized_ids = await crud_nft.get_categorized_chain_ids(db)
                else:
                    categories = await crud_category.get_categories_by_codes(db, codes)
                    category_ids = [categories[code].id for code in codes if code in categories]
                    chain_ids = await crud_nft.get_chain_ids_for_categories(db, category_ids)
            if codes is None:
                query = queries.nfts_not_in_ids(categorized_ids, limit, page, listed)
            else:
                query = queries.nfts_from_ids(chain_ids, limit, page, listed, distinct=True)
            result = await self.indexer.get_nfts(query)
            return await populate_result(result, self._populate_nft)
        except Exception as e:
            logger.error(f"Error getting NFTs for categories {codes}: {e}")
            raise NFTServiceError("Couldn't get NFTs by categories") from None

    async def create_nft(self, nft_data: NFTCreate) -> LocalNFTResponse:
        """Creates the local record of an NFT; unknown category codes are kept as empty slots"""
        try:
            async with self.session_factory() as db:
                categories = await crud_category.get_categories_by_codes(db, nft_data.categories)
                nft = await crud_nft.create_nft(
                    db, nft_data.chain_id, [categories.get(code) for code in nft_data.categories]
                )
                return LocalNFTResponse.model_validate(nft)
        except Exception as e:
            logger.error(f"Error creating NFT {nft_data.chain_id}: {e}")
            raise NFTNotCreatedError() from None

    async def find_mongo_nft_from_id(self, chain_id: str) -> Optional[LocalNFTResponse]:
        """Finds the local record of an NFT, None when it has none"""
        try:
            async with self.session_factory() as db:
                nft = await crud_nft.get_nft_by_chain_id(db, chain_id)
                if not nft:
                    return None
                return LocalNFTResponse.model_validate(nft)
        except Exception as e:
            logger.error(f"Error finding local NFT {chain_id}: {e}")
            raise LocalNFTLookupError() from None

    async def get_nfts_for_serie(self, nft: NFTResponse, page=None, limit=None) -> NFTList:
        """Finds NFTs with the same serie, without local enrichment

        An NFT outside any serie is its own only sibling.
        """
        if nft.serie_id == NO_SERIE:
            return NFTListResponse(total_count=1, nodes=[nft.model_copy(update={"categories": None, "views_count": None})])
        try:
            return await self.indexer.get_nfts(queries.nfts_for_serie(nft.serie_id, limit, page))
        except Exception as e:
            logger.error(f"Error getting serie {nft.serie_id}: {e}")
            raise NFTServiceError("Couldn't get NFTs for this serie") from None
