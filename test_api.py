import asyncio

import pytest
from fastapi.testclient import TestClient

from conftest import FakeIndexer, build_service, make_nft, seed_categories, seed_user
from core.category import CategoryService
from db.session import create_tables_async
from main import create_app

@pytest.fixture
def indexer():
    return FakeIndexer([
        make_nft(1, serie_id="S", owner="alice", listed=1),
        make_nft(2, serie_id="S", owner="alice"),
        make_nft(3, owner="bob", creator="bob"),
    ])

@pytest.fixture
def api(tmp_path, indexer):
    engine, session_factory, service = build_service(tmp_path, indexer)

    async def setup():
        await create_tables_async(engine)
        await seed_categories(session_factory, "art", "music")
        await seed_user(session_factory, "alice", name="Alice")

    asyncio.run(setup())

    app = create_app()
    app.state.session_factory = session_factory
    app.state.nft_service = service
    app.state.category_service = CategoryService(session_factory)
    with TestClient(app) as client:
        yield client

def test_health(api):
    assert api.get("/health").json()["status"] == "healthy"

def test_list_nfts(api):
    response = api.get("/api/NFTs")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert [nft["id"] for nft in body["data"]["nodes"]] == ["1", "3"]
    assert body["data"]["nodes"][0]["serieId"] == "S"
    assert body["data"]["nodes"][0]["categories"] == []

def test_list_nfts_paginated_and_listed(api):
    body = api.get("/api/NFTs", params={"page": 1, "limit": 1}).json()
    assert body["data"]["pageInfo"]["hasNextPage"] is True
    assert len(body["data"]["nodes"]) == 1

    listed = api.get("/api/NFTs/owner/alice", params={"listed": 1}).json()
    assert [nft["id"] for nft in listed["data"]["nodes"]] == ["1"]

def test_same_routes_for_wallet_app_and_time_machine(api):
    for prefix in ("/api/app/NFTs", "/api/tm/NFTs"):
        assert api.get(f"{prefix}/creator/bob").json()["data"]["totalCount"] == 1

def test_create_then_filter_by_category(api):
    created = api.post("/api/NFTs", json={"chainId": "3", "categories": ["art", "ghost"]})
    assert created.status_code == 200
    data = created.json()["data"]
    assert data["chainId"] == "3"
    assert data["categories"][0]["code"] == "art"
    assert data["categories"][1] is None

    by_code = api.get("/api/NFTs/category", params={"codes": "art"}).json()
    assert [nft["id"] for nft in by_code["data"]["nodes"]] == ["3"]
    assert by_code["data"]["nodes"][0]["categories"][0]["code"] == "art"

    uncategorized = api.get("/api/NFTs/category").json()
    assert [nft["id"] for nft in uncategorized["data"]["nodes"]] == ["1"]

    local = api.get("/api/NFTs/local/3").json()
    assert local["data"]["chainId"] == "3"
    assert api.get("/api/NFTs/local/99").json()["data"] is None

def test_nfts_from_ids(api):
    body = api.get("/api/NFTs/ids", params={"ids": "1,2,404"}).json()
    assert [nft["id"] for nft in body["data"]["nodes"]] == ["1", "2"]

    distinct = api.get("/api/NFTs/ids", params={"ids": "1,2,3", "distinct": True}).json()
    assert [nft["id"] for nft in distinct["data"]["nodes"]] == ["1", "3"]

def test_get_nft_counts_views_by_forwarded_address(api):
    headers = {"X-Forwarded-For": "1.2.3.4, 10.0.0.1"}
    first = api.get("/api/NFTs/3", params={"incViews": True}, headers=headers).json()
    again = api.get("/api/NFTs/3", params={"incViews": True}, headers=headers).json()
    other = api.get("/api/NFTs/3", params={"incViews": True}, headers={"X-Forwarded-For": "5.6.7.8"}).json()
    plain = api.get("/api/NFTs/3").json()

    assert first["data"]["viewsCount"] == 1
    assert again["data"]["viewsCount"] == 1
    assert other["data"]["viewsCount"] == 2
    assert plain["data"]["viewsCount"] == 0

def test_serie_route(api):
    body = api.get("/api/NFTs/2/series").json()
    assert sorted(nft["id"] for nft in body["data"]["nodes"]) == ["1", "2"]

    single = api.get("/api/NFTs/3/series").json()["data"]
    assert single["totalCount"] == 1
    assert [nft["id"] for nft in single["nodes"]] == ["3"]

def test_unknown_nft_is_a_coarse_error(api):
    response = api.get("/api/NFTs/404")
    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "Couldn't get NFT", "data": None}

def test_indexer_down(api, indexer):
    indexer.status_code = 502
    response = api.get("/api/NFTs/owner/alice")
    assert response.status_code == 500
    assert response.json()["message"] == "Couldn't get user's owned NFTs"

def test_user_stats(api):
    body = api.get("/api/NFTs/stat/alice").json()
    assert body["data"] == {
        "countOwned": 2,
        "countOwnedListed": 1,
        "countOwnedUnlisted": 1,
        "countCreated": 2,
        "countFollowers": 0,
        "countFollowed": 0,
    }
    assert api.get("/api/NFTs/stat/nobody").json()["message"] == "Couldn't get users stat"

def test_users(api):
    assert api.get("/api/users/alice").json()["data"]["name"] == "Alice"
    assert api.get("/api/users/nobody").status_code == 404

    created = api.post("/api/users", json={"walletId": "carol", "twitterName": "carol_nft"})
    assert created.status_code == 201
    assert created.json()["data"]["twitterName"] == "carol_nft"
    assert api.post("/api/users", json={"walletId": "carol"}).status_code == 400

def test_categories(api):
    codes = [category["code"] for category in api.get("/api/categories").json()["data"]]
    assert codes == ["art", "music"]
    assert api.get("/api/categories/music").json()["data"]["name"] == "Music"
    assert api.get("/api/categories/nope").status_code == 404
