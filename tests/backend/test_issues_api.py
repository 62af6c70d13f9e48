from core.constants import ISSUES_TOPIC


def _create(client, headers, project_id, **body):
    payload = {"title": "Bug A", "projectId": project_id, **body}
    return client.post("/api/issues", json=payload, headers=headers)


def test_health(test_app_client):
    client, _, _ = test_app_client

    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert "x-request-id" in resp.headers


def test_missing_token_is_401(test_app_client):
    client, _, _ = test_app_client

    resp = client.get("/api/issues")

    assert resp.status_code == 401
    assert resp.json()["detail"] == "User not authenticated"


def test_token_for_unknown_email_is_401(authorized_client, headers_for):
    client, _, _ = authorized_client

    resp = client.get("/api/issues", headers=headers_for("nobody@example.com"))

    assert resp.status_code == 401


def test_garbage_token_is_401(authorized_client):
    client, _, _ = authorized_client

    resp = client.get("/api/issues", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 401


def test_create_read_update_delete(authorized_client, project_id):
    client, headers, publisher = authorized_client

    created = _create(client, headers["alice"], project_id, description="Steps")
    assert created.status_code == 201
    issue = created.json()
    assert issue["status"] == "OPEN"
    assert issue["priority"] == "MEDIUM"
    assert issue["creatorName"] == "Alice"

    fetched = client.get(f"/api/issues/{issue['id']}", headers=headers["bob"])
    assert fetched.status_code == 200
    assert fetched.json()["title"] == "Bug A"

    updated = client.put(
        f"/api/issues/{issue['id']}",
        json={"title": "Bug A", "projectId": project_id, "status": "RESOLVED", "priority": "HIGH"},
        headers=headers["bob"],
    )
    assert updated.status_code == 200
    assert updated.json()["status"] == "RESOLVED"

    activities = client.get(f"/api/issues/{issue['id']}/activities", headers=headers["alice"])
    types = {a["activityType"] for a in activities.json()}
    assert types == {"ISSUE_CREATED", "STATUS_CHANGED", "PRIORITY_CHANGED", "DESCRIPTION_CHANGED"}

    deleted = client.delete(f"/api/issues/{issue['id']}", headers=headers["alice"])
    assert deleted.status_code == 204

    missing = client.get(f"/api/issues/{issue['id']}", headers=headers["alice"])
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Issue not found"

    assert [e.event_type.value for e in publisher.events_for(ISSUES_TOPIC)] == [
        "CREATED",
        "UPDATED",
        "DELETED",
    ]


def test_blank_title_is_422(authorized_client, project_id):
    client, headers, _ = authorized_client

    resp = _create(client, headers["alice"], project_id, title="   ")

    assert resp.status_code == 422


def test_unknown_project_is_404(authorized_client):
    client, headers, _ = authorized_client

    resp = _create(client, headers["alice"], 999)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Project not found"


def test_list_with_filters_and_paging(authorized_client, project_id, people):
    client, headers, _ = authorized_client
    bob_id = people["bob"].id
    _create(client, headers["alice"], project_id, title="Login fails", priority="HIGH", assigneeId=bob_id)
    _create(client, headers["alice"], project_id, title="Login slow", priority="LOW", assigneeId=bob_id)
    _create(client, headers["alice"], project_id, title="Docs", priority="HIGH")

    resp = client.get(
        "/api/issues",
        params={"priority": "HIGH", "assigneeId": bob_id, "searchText": "login"},
        headers=headers["alice"],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert [i["title"] for i in body["content"]] == ["Login fails"]
    assert body["totalElements"] == 1

    paged = client.get("/api/issues", params={"size": 2, "page": 1}, headers=headers["alice"]).json()
    assert paged["totalPages"] == 2
    assert paged["last"] is True
    assert len(paged["content"]) == 1


def test_unknown_sort_field_is_422(authorized_client):
    client, headers, _ = authorized_client

    resp = client.get("/api/issues", params={"sortBy": "assignee"}, headers=headers["alice"])

    assert resp.status_code == 422
    assert "Unknown sort field" in resp.json()["detail"]


def test_search_text_alone_narrows_listing(authorized_client, project_id):
    client, headers, _ = authorized_client
    _create(client, headers["alice"], project_id, title="Login fails")
    _create(client, headers["alice"], project_id, title="Docs")

    resp = client.get("/api/issues", params={"searchText": "login"}, headers=headers["alice"])

    assert resp.status_code == 200
    assert [i["title"] for i in resp.json()["content"]] == ["Login fails"]


def test_views_and_pages_use_camel_case(authorized_client, project_id, people):
    client, headers, _ = authorized_client

    issue = _create(client, headers["alice"], project_id, assigneeId=people["bob"].id).json()
    page = client.get("/api/issues", headers=headers["alice"]).json()

    assert {"projectId", "projectName", "creatorId", "assigneeName", "createdAt"} <= issue.keys()
    assert "project_id" not in issue
    assert {"content", "page", "size", "totalElements", "totalPages", "last"} == page.keys()
