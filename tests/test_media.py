import os

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_image(client, auth_headers, settings):
    response = client.post(
        "/api/media/upload",
        files={"file": ("photo.png", PNG_BYTES, "image/png")},
        data={"alt_text": "A photo"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "文件上传成功"
    media = body["media"]
    assert media["original_name"] == "photo.png"
    assert media["mime_type"] == "image/png"
    assert media["size"] == len(PNG_BYTES)
    assert media["alt_text"] == "A photo"
    assert media["filename"].startswith("file-")
    assert media["filename"].endswith(".png")
    assert media["path"] == f"/uploads/{media['filename']}"

    stored = os.path.join(settings.UPLOAD_DIR, media["filename"])
    with open(stored, "rb") as f:
        assert f.read() == PNG_BYTES

    # Served back as a static file
    served = client.get(media["path"])
    assert served.status_code == 200
    assert served.content == PNG_BYTES


def test_upload_requires_auth(client):
    response = client.post("/api/media/upload", files={"file": ("photo.png", PNG_BYTES, "image/png")})
    assert response.status_code == 401


def test_upload_without_file(client, auth_headers):
    response = client.post("/api/media/upload", data={"alt_text": "nothing"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "没有上传文件"}


def test_upload_rejects_non_image(client, auth_headers, settings):
    response = client.post(
        "/api/media/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "只允许上传图片文件"}
    assert os.listdir(settings.UPLOAD_DIR) == []


def test_upload_rejects_mismatched_extension(client, auth_headers):
    response = client.post(
        "/api/media/upload",
        files={"file": ("script.exe", PNG_BYTES, "image/png")},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_upload_too_large_is_not_written(client, auth_headers, settings):
    oversized = b"0" * (settings.MAX_UPLOAD_SIZE + 1)

    response = client.post(
        "/api/media/upload",
        files={"file": ("big.jpg", oversized, "image/jpeg")},
        headers=auth_headers,
    )

    assert response.status_code == 400
    assert response.json() == {"error": "文件大小超过限制（5MB）"}
    assert os.listdir(settings.UPLOAD_DIR) == []
    assert client.get("/api/media", headers=auth_headers).json()["pagination"]["total"] == 0


def test_upload_at_size_limit_is_accepted(client, auth_headers):
    exact = b"0" * 5 * 1024 * 1024
    response = client.post(
        "/api/media/upload",
        files={"file": ("exact.gif", exact, "image/gif")},
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["media"]["size"] == len(exact)


def test_list_media(client, auth_headers):
    for name in ("a.png", "b.webp", "c.svg"):
        mime = {"png": "image/png", "webp": "image/webp", "svg": "image/svg+xml"}[name.split(".")[1]]
        client.post("/api/media/upload", files={"file": (name, PNG_BYTES, mime)}, headers=auth_headers)

    body = client.get("/api/media", params={"limit": 2}, headers=auth_headers).json()

    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert [m["original_name"] for m in body["media"]] == ["c.svg", "b.webp"]


def test_list_media_requires_auth(client):
    assert client.get("/api/media").status_code == 401
