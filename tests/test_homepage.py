import json

from sqlmodel import Session

from blogcms.models.homepage import Homepage, migrate_homepage

FIRST = {
    "zh": {
        "site": {"title": "我的博客", "tagline": "记录生活"},
        "welcome": {"title": "欢迎", "currentRole": "工程师", "currentCompany": "某公司"},
    }
}

SECOND = {
    "zh": {"site": {"title": "新的标题"}},
    "en": {"site": {"title": "New title"}, "welcome": {"subtitle": "Hello"}},
}


def test_homepage_empty_by_default(client):
    response = client.get("/api/homepage")
    assert response.status_code == 200
    assert response.json() == {"success": True, "content": {}}


def test_save_and_read_homepage(client, auth_headers):
    response = client.post("/api/homepage", json=FIRST, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "主页内容保存成功"}
    assert client.get("/api/homepage").json() == {"success": True, "content": {"version": 1, **FIRST}}


def test_last_write_wins(client, auth_headers):
    client.post("/api/homepage", json=FIRST, headers=auth_headers)
    client.post("/api/homepage", json=SECOND, headers=auth_headers)

    # Fully overwritten: nothing of the first payload survives
    assert client.get("/api/homepage").json()["content"] == {"version": 1, **SECOND}


def test_save_requires_auth(client):
    assert client.post("/api/homepage", json=FIRST).status_code == 401


def test_save_rejects_non_object(client, auth_headers):
    response = client.post("/api/homepage", json=["not", "an", "object"], headers=auth_headers)
    assert response.status_code == 400


def test_unknown_fields_are_dropped(client, auth_headers):
    payload = {"zh": {"site": {"title": "T", "color": "red"}}, "theme": "dark"}
    client.post("/api/homepage", json=payload, headers=auth_headers)
    assert client.get("/api/homepage").json()["content"] == {"version": 1, "zh": {"site": {"title": "T"}}}


def test_legacy_blob_is_migrated_on_read(client):
    legacy = {"site": {"title": "旧标题"}, "welcome": {"intro1": "你好"}}
    with Session(client.app.state.engine) as session:
        session.add(Homepage(id=1, content=json.dumps(legacy), schema_version=0))
        session.commit()

    response = client.get("/api/homepage")

    assert response.json() == {"success": True, "content": {"version": 1, "zh": legacy}}


def test_unreadable_blob(client):
    with Session(client.app.state.engine) as session:
        session.add(Homepage(id=1, content="{not json"))
        session.commit()

    assert client.get("/api/homepage").json() == {"success": False, "message": "数据解析错误"}


def test_migrate_leaves_current_documents_alone():
    assert migrate_homepage(FIRST, 1) == FIRST
    assert migrate_homepage({"zh": {}}, 0) == {"zh": {}}


def test_legacy_i18n_update(client, auth_headers, settings):
    with open(settings.I18N_PATH, "w", encoding="utf-8") as f:
        json.dump({
            "zh": {"site": {"title": "旧", "tagline": "保留"}, "welcome": {"title": "欢迎"}},
            "en": {"site": {"title": "Old", "tagline": "Keep"}},
        }, f)

    response = client.post(
        "/api/homepage/update",
        json={"site": {"title": "新"}, "welcome": {"subtitle": "副标题"}},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {"message": "主页内容更新成功"}
    with open(settings.I18N_PATH, encoding="utf-8") as f:
        data = json.load(f)
    assert data["zh"]["site"] == {"title": "新", "tagline": "保留"}
    assert data["zh"]["welcome"] == {"title": "欢迎", "subtitle": "副标题"}
    assert data["en"]["site"] == {"title": "新", "tagline": "Keep"}


def test_legacy_i18n_update_without_file(client, auth_headers):
    response = client.post("/api/homepage/update", json={"site": {"title": "x"}}, headers=auth_headers)
    assert response.status_code == 500
    assert response.json() == {"error": "无法读取国际化文件"}


def test_stored_document_carries_schema_version(client, auth_headers):
    client.post("/api/homepage", json={"version": 0, **FIRST}, headers=auth_headers)

    with Session(client.app.state.engine) as session:
        row = session.get(Homepage, 1)
        stored = json.loads(row.content)

    assert stored["version"] == 1
    assert row.schema_version == 1
    assert client.get("/api/homepage").json()["content"]["version"] == 1
