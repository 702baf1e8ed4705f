import asyncio
import json
from functools import partial

import httpx
import pytest

from core.indexer import IndexerClient
from core.nft import NFTService
from crud.user import create_user
from db.session import make_async_engine, make_session_factory, create_tables_async
from crud.category import create_category
from models.follow import Follow
from schemas.category import CategoryCreate
from schemas.user import UserCreate

INDEXER_URL = "http://indexer.test/graphql"

def make_nft(nft_id, serie_id="0", owner="alice", creator="alice", listed=0, **extra):
    """Indexer node as the indexer serializes it"""
    node = {
        "id": str(nft_id),
        "owner": owner,
        "creator": creator,
        "listed": listed,
        "serieId": serie_id,
        "timestampList": None,
        "uri": f"ipfs://nft-{nft_id}",
        "price": "0",
        "priceTiime": "0",
    }
    node.update(extra)
    return node

def matches(node, nft_filter):
    """Evaluate the subset of NftEntityFilter the query builder emits"""
    if not nft_filter:
        return True
    if "and" in nft_filter:
        return all(matches(node, clause) for clause in nft_filter["and"])
    for field, operators in nft_filter.items():
        value = node.get(field)
        for operator, expected in operators.items():
            if operator == "equalTo" and value != expected:
                return False
            if operator == "in" and value not in expected:
                return False
            if operator == "notIn" and value in expected:
                return False
            if operator == "isNull" and (value is None) != expected:
                return False
    return True

class FakeIndexer:
    """In-memory indexer answering the GraphQL payloads over httpx.MockTransport"""

    def __init__(self, nodes=None, group_series=True):
        self.nodes = list(nodes or [])
        self.group_series = group_series
        self.requests = []
        self.status_code = 200
        self.errors = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        self.requests.append(body)
        if self.status_code != 200:
            return httpx.Response(self.status_code, text="indexer unavailable")
        if self.errors:
            return httpx.Response(200, json={"errors": self.errors, "data": None})

        document, variables = body["query"], body.get("variables") or {}
        root = "distinctSerieNfts" if "distinctSerieNfts" in document else "nftEntities"
        nodes = [node for node in self.nodes if matches(node, variables.get("filter"))]
        if root == "distinctSerieNfts" and self.group_series:
            seen, grouped = set(), []
            for node in nodes:
                if node["serieId"] != "0":
                    if node["serieId"] in seen:
                        continue
                    seen.add(node["serieId"])
                grouped.append(node)
            nodes = grouped

        connection = {"totalCount": len(nodes)}
        if "first" in variables:
            first, offset = variables["first"], variables.get("offset", 0)
            connection["pageInfo"] = {
                "hasNextPage": offset + first < len(nodes),
                "hasPreviousPage": offset > 0,
            }
            nodes = nodes[offset:offset + first]
        if "nodes" in document:
            connection["nodes"] = nodes
        return httpx.Response(200, json={"data": {root: connection}})

def build_service(tmp_path, fake, **service_kwargs):
    engine = make_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    session_factory = make_session_factory(engine)
    client = httpx.AsyncClient(transport=httpx.MockTransport(fake.handler))
    service = NFTService(IndexerClient(INDEXER_URL, client=client), session_factory, **service_kwargs)
    return engine, session_factory, service

def run_scenario(tmp_path, fake, scenario, **service_kwargs):
    """Run ``scenario(service, session_factory)`` against a fresh database"""
    async def main():
        engine, session_factory, service = build_service(tmp_path, fake, **service_kwargs)
        await create_tables_async(engine)
        try:
            return await scenario(service, session_factory)
        finally:
            await service.indexer.aclose()
            await engine.dispose()

    return asyncio.run(main())

async def seed_categories(session_factory, *codes):
    async with session_factory() as db:
        for code in codes:
            await create_category(db, CategoryCreate(code=code, name=code.title()))

async def seed_user(session_factory, wallet_id, name=None):
    async with session_factory() as db:
        return await create_user(db, UserCreate(wallet_id=wallet_id, name=name))

async def seed_follow(session_factory, follower, followed):
    async with session_factory() as db:
        db.add(Follow(follower_id=follower.id, followed_id=followed.id))
        await db.commit()

@pytest.fixture
def fake_indexer():
    return FakeIndexer()

@pytest.fixture
def run(tmp_path, fake_indexer):
    return partial(run_scenario, tmp_path, fake_indexer)
