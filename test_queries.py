from core import queries

NOT_BURNT = {"timestampBurn": {"isNull": True}}

def test_unpaginated_query_requests_everything():
    query = queries.all_nfts()
    assert "distinctSerieNfts" in query.document
    assert "pageInfo" not in query.document
    assert "first" not in query.variables
    assert query.variables["filter"] == {"and": [NOT_BURNT]}

def test_pagination_needs_both_page_and_limit():
    assert "first" not in queries.all_nfts(limit=10).variables
    assert "first" not in queries.all_nfts(page=2).variables

    query = queries.all_nfts(limit=10, page=3)
    assert query.variables["first"] == 10
    assert query.variables["offset"] == 20
    assert "pageInfo" in query.document

def test_listed_filter():
    listed = queries.nfts_from_owner_id("alice", listed=True).variables["filter"]["and"]
    unlisted = queries.nfts_from_owner_id("alice", listed=False).variables["filter"]["and"]
    both = queries.nfts_from_owner_id("alice").variables["filter"]["and"]

    assert {"listed": {"equalTo": 1}} in listed
    assert {"listed": {"equalTo": 0}} in unlisted
    assert not any("listed" in clause for clause in both)
    assert {"owner": {"equalTo": "alice"}} in both

def test_single_nft_query_is_not_grouped():
    query = queries.nft_from_id("42")
    assert "nftEntities" in query.document
    assert {"id": {"equalTo": "42"}} in query.variables["filter"]["and"]

def test_id_list_queries():
    inclusive = queries.nfts_from_ids(["1", "2"])
    distinct = queries.nfts_from_ids(["1", "2"], distinct=True)
    exclusive = queries.nfts_not_in_ids(["3"])

    assert "nftEntities" in inclusive.document
    assert "distinctSerieNfts" in distinct.document
    assert {"id": {"in": ["1", "2"]}} in inclusive.variables["filter"]["and"]
    assert {"id": {"notIn": ["3"]}} in exclusive.variables["filter"]["and"]

def test_creator_and_serie_queries():
    assert {"creator": {"equalTo": "bob"}} in queries.nfts_from_creator_id("bob").variables["filter"]["and"]
    serie = queries.nfts_for_serie("S1", limit=5, page=1)
    assert {"serieId": {"equalTo": "S1"}} in serie.variables["filter"]["and"]
    assert serie.variables["offset"] == 0

def test_count_queries_only_ask_total():
    for query in (
        queries.count_owner_owned("alice"),
        queries.count_owner_owned_listed("alice"),
        queries.count_owner_owned_unlisted("alice"),
        queries.count_created("alice"),
    ):
        assert "totalCount" in query.document
        assert "nodes" not in query.document

    assert {"listed": {"equalTo": 1}} in queries.count_owner_owned_listed("alice").variables["filter"]["and"]
    assert {"creator": {"equalTo": "alice"}} in queries.count_created("alice").variables["filter"]["and"]

def test_payload_shape():
    payload = queries.nft_from_id("1").payload()
    assert set(payload) == {"query", "variables"}
