def test_category_feed(client, upstream, article_factory):
    upstream.batches["technology"] = [article_factory("t1", "Chips")]

    resp = client.get("/api/news/", params={"category": "technology"})

    assert resp.status_code == 200
    assert [a["id"] for a in resp.json()] == ["t1"]


def test_feed_falls_back_to_mock(client, upstream):
    upstream.failing = True
    resp = client.get("/api/news/", params={"category": "sports"})
    assert resp.status_code == 200
    assert resp.json()
    assert all(a["category"] == "sports" for a in resp.json())


def test_trending_on_cold_start(client, upstream):
    resp = client.get("/api/news/trending")
    assert resp.status_code == 200
    assert len(resp.json()) == 10
    assert upstream.calls == []


def test_latest_and_search(client, upstream, article_factory):
    upstream.batches["general"] = [
        article_factory("a", "Solar record", published_at="2024-01-01T00:00:00Z"),
        article_factory("b", "Wind record", published_at="2024-02-01T00:00:00Z"),
    ]
    client.get("/api/news/")

    latest = client.get("/api/news/latest", params={"page": 1, "limit": 1})
    assert [a["id"] for a in latest.json()] == ["b"]

    found = client.get("/api/news/search", params={"q": "solar"})
    assert [a["id"] for a in found.json()] == ["a"]

    assert client.get("/api/news/search").json() == []


def test_recommendations(client, upstream, article_factory):
    upstream.batches["general"] = [article_factory(f"r{i}", f"Story {i}") for i in range(3)]
    client.get("/api/news/")
    assert len(client.get("/api/news/recommendations").json()) == 3


def test_get_by_id(client, upstream, article_factory):
    upstream.batches["general"] = [article_factory("abc123", "Found me")]
    client.get("/api/news/")

    assert client.get("/api/news/abc123").json()["title"] == "Found me"

    missing = client.get("/api/news/unknown-id")
    assert missing.status_code == 404


def test_like_requires_auth(client):
    assert client.post("/api/news/abc123/like").status_code == 401


def test_like_toggle(client, upstream, article_factory, auth_headers):
    upstream.batches["general"] = [article_factory("abc123", "Likeable")]
    client.get("/api/news/")

    first = client.post("/api/news/abc123/like", headers=auth_headers)
    second = client.post("/api/news/abc123/like", headers=auth_headers)

    assert first.json() == {"likes": 1, "liked": True}
    assert second.json() == {"likes": 0, "liked": False}


def test_like_unknown(client, auth_headers):
    assert client.post("/api/news/ghost/like", headers=auth_headers).status_code == 404


def test_view_counter_never_fails(client, auth_headers):
    assert client.post("/api/news/ghost/view").status_code == 200

    client.post("/api/saved/", json={"contentId": "viewed", "article": {"title": "Viewed"}}, headers=auth_headers)
    client.post("/api/news/viewed/view")

    assert client.get("/api/news/viewed").json()["views"] == 1


def test_health_reports_tiers(client, upstream, article_factory):
    upstream.batches["general"] = [article_factory("h1", "Health")]
    client.get("/api/news/")

    body = client.get("/health").json()
    assert body == {"status": "ok", "cached_categories": 1, "stored_articles": 1}
