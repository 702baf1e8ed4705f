"""GraphQL queries for the blockchain indexer.

Every builder is pure: it returns the query document together with the
variables the indexer should receive. Filters follow the indexer's
``NftEntityFilter`` input (``equalTo``, ``in``, ``notIn``, ``isNull`` joined
with ``and``). Pagination is only applied when both ``limit`` and ``page`` are
given, otherwise the whole result set is requested.
"""
from typing import Any, Dict, List, NamedTuple, Optional

NFT_FIELDS = """
      id
      owner
      creator
      listed
      timestampList
      uri
      price
      priceTiime
      serieId
"""

NFT_ENTITIES = "nftEntities"
DISTINCT_SERIE_NFTS = "distinctSerieNfts"

class GraphQLQuery(NamedTuple):
    document: str
    variables: Dict[str, Any]

    def payload(self) -> Dict[str, Any]:
        return {"query": self.document, "variables": self.variables}

def _pagination(limit: Optional[int], page: Optional[int]) -> Optional[Dict[str, int]]:
    if limit is None or page is None:
        return None
    limit = int(limit)
    page = max(int(page), 1)
    return {"first": limit, "offset": (page - 1) * limit}

def _filter(*conditions: Dict[str, Any], listed: Optional[bool] = None) -> Dict[str, Any]:
    clauses = [{"timestampBurn": {"isNull": True}}]
    clauses.extend(conditions)
    if listed is not None:
        clauses.append({"listed": {"equalTo": 1 if listed else 0}})
    return {"and": clauses}

def _list_query(root: str, nft_filter: Dict[str, Any], limit=None, page=None) -> GraphQLQuery:
    pagination = _pagination(limit, page)
    if pagination is None:
        document = f"""
query ($filter: NftEntityFilter) {{
  {root}(filter: $filter, orderBy: TIMESTAMP_CREATE_DESC) {{
    totalCount
    nodes {{{NFT_FIELDS}    }}
  }}
}}"""
        return GraphQLQuery(document, {"filter": nft_filter})
    document = f"""
query ($filter: NftEntityFilter, $first: Int, $offset: Int) {{
  {root}(filter: $filter, first: $first, offset: $offset, orderBy: TIMESTAMP_CREATE_DESC) {{
    totalCount
    pageInfo {{
      hasNextPage
      hasPreviousPage
    }}
    nodes {{{NFT_FIELDS}    }}
  }}
}}"""
    return GraphQLQuery(document, {"filter": nft_filter, **pagination})

def _count_query(nft_filter: Dict[str, Any]) -> GraphQLQuery:
    document = f"""
query ($filter: NftEntityFilter) {{
  {NFT_ENTITIES}(filter: $filter) {{
    totalCount
  }}
}}"""
    return GraphQLQuery(document, {"filter": nft_filter})

def all_nfts(limit=None, page=None, listed: Optional[bool] = None) -> GraphQLQuery:
    return _list_query(DISTINCT_SERIE_NFTS, _filter(listed=listed), limit, page)

def nft_from_id(nft_id: str) -> GraphQLQuery:
    return _list_query(NFT_ENTITIES, _filter({"id": {"equalTo": str(nft_id)}}))

def nfts_from_owner_id(owner_id: str, limit=None, page=None, listed: Optional[bool] = None) -> GraphQLQuery:
    return _list_query(
        DISTINCT_SERIE_NFTS, _filter({"owner": {"equalTo": owner_id}}, listed=listed), limit, page
    )

def nfts_from_creator_id(creator_id: str, limit=None, page=None, listed: Optional[bool] = None) -> GraphQLQuery:
    return _list_query(
        DISTINCT_SERIE_NFTS, _filter({"creator": {"equalTo": creator_id}}, listed=listed), limit, page
    )

def nfts_from_ids(
    ids: List[str],
    limit=None,
    page=None,
    listed: Optional[bool] = None,
    distinct: bool = False,
) -> GraphQLQuery:
    root = DISTINCT_SERIE_NFTS if distinct else NFT_ENTITIES
    return _list_query(root, _filter({"id": {"in": [str(i) for i in ids]}}, listed=listed), limit, page)

def nfts_not_in_ids(ids: List[str], limit=None, page=None, listed: Optional[bool] = None) -> GraphQLQuery:
    return _list_query(
        DISTINCT_SERIE_NFTS, _filter({"id": {"notIn": [str(i) for i in ids]}}, listed=listed), limit, page
    )

def nfts_for_serie(serie_id: str, limit=None, page=None) -> GraphQLQuery:
    return _list_query(NFT_ENTITIES, _filter({"serieId": {"equalTo": serie_id}}), limit, page)

# Count-only queries used for user statistics

def count_owner_owned(owner_id: str) -> GraphQLQuery:
    return _count_query(_filter({"owner": {"equalTo": owner_id}}))

def count_owner_owned_listed(owner_id: str) -> GraphQLQuery:
    return _count_query(_filter({"owner": {"equalTo": owner_id}}, listed=True))

def count_owner_owned_unlisted(owner_id: str) -> GraphQLQuery:
    return _count_query(_filter({"owner": {"equalTo": owner_id}}, listed=False))

def count_created(creator_id: str) -> GraphQLQuery:
    return _count_query(_filter({"creator": {"equalTo": creator_id}}))
