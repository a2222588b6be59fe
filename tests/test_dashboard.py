def test_dashboard_stats(client, auth_headers, create_post):
    for n in range(6):
        create_post(published=n % 2 == 0)
    client.post(
        "/api/media/upload",
        files={"file": ("a.png", b"\x89PNG", "image/png")},
        headers=auth_headers,
    )

    response = client.get("/api/dashboard/stats", headers=auth_headers)

    assert response.status_code == 200
    stats = response.json()["stats"]
    assert stats["totalPosts"] == 6
    assert stats["publishedPosts"] == 3
    assert stats["totalMedia"] == 1
    assert len(stats["recentPosts"]) == 5
    assert stats["recentPosts"][0]["title_en"] == "Post 6"
    assert set(stats["recentPosts"][0]) == {"id", "title_en", "title_zh", "created_at", "published"}


def test_dashboard_requires_auth(client):
    assert client.get("/api/dashboard/stats").status_code == 401


def test_categories_are_seeded(client):
    response = client.get("/api/categories")

    assert response.status_code == 200
    categories = response.json()["categories"]
    assert [c["id"] for c in categories] == ["life", "technology", "thoughts"]
    assert categories[1]["name_zh"] == "技术"
