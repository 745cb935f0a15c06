import uuid
from datetime import datetime, timedelta

from factories import group, project_payload

BASE = "/api/v1/projects"


def create(client, **kwargs) -> dict:
    resp = client.post(BASE, json=project_payload(**kwargs))
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/").json()["status"] == "ok"


def test_create_returns_camel_case_aggregate(client):
    body = create(client, groups=[group("ABC123", "XYZ9", type="same-price")])

    assert body["name"] == "Weekly promo"
    assert body["createdAt"] == body["updatedAt"]
    assert body["config"]["headerText"] == "Only this week"
    assert body["config"]["backgroundColor"] == "#ffffff"

    g = body["groups"][0]
    assert g["type"] == "same-price"
    assert g["image"] == "imagens_produtos/ABC123.png"
    assert [p["code"] for p in g["products"]] == ["ABC123", "XYZ9"]
    assert g["products"][0]["price"] == 9.9


def test_create_ignores_client_ids(client):
    payload = project_payload()
    payload["groups"][0]["id"] = "group-1"
    payload["groups"][0]["products"][0]["id"] = "product-1"

    resp = client.post(BASE, json=payload)

    assert resp.status_code == 201
    g = resp.json()["groups"][0]
    uuid.UUID(g["id"])
    uuid.UUID(g["products"][0]["id"])


def test_create_rejects_empty_name(client):
    resp = client.post(BASE, json=project_payload(name=""))

    assert resp.status_code == 400
    assert client.get(BASE).json()["totalElements"] == 0


def test_create_rejects_group_without_products(client):
    resp = client.post(BASE, json=project_payload(groups=[{"type": "single", "products": []}]))

    assert resp.status_code == 400


def test_create_rejects_unknown_group_type(client):
    resp = client.post(BASE, json=project_payload(groups=[group("A1", type="triple")]))

    assert resp.status_code == 422


def test_create_rejects_negative_price(client):
    payload = project_payload()
    payload["groups"][0]["products"][0]["price"] = -1

    assert client.post(BASE, json=payload).status_code == 422


def test_get_project(client):
    created = create(client)

    resp = client.get(f"{BASE}/{created['id']}")

    assert resp.status_code == 200
    assert resp.json() == created


def test_get_unknown_project_is_404(client):
    assert client.get(f"{BASE}/{uuid.uuid4()}").status_code == 404


def test_update_project(client):
    created = create(client, groups=[group("A1"), group("B1", position=1), group("C1", position=2)])

    resp = client.put(
        f"{BASE}/{created['id']}",
        json=project_payload(name="Renamed", groups=[group("Z1")]),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "Renamed"
    assert body["createdAt"] == created["createdAt"]
    assert body["config"]["id"] == created["config"]["id"]
    assert [g["image"] for g in body["groups"]] == ["imagens_produtos/Z1.png"]


def test_update_unknown_project_is_404(client):
    resp = client.put(f"{BASE}/{uuid.uuid4()}", json=project_payload())

    assert resp.status_code == 404


def test_delete_project(client):
    created = create(client)

    assert client.delete(f"{BASE}/{created['id']}").status_code == 204
    assert client.get(f"{BASE}/{created['id']}").status_code == 404
    assert client.delete(f"{BASE}/{created['id']}").status_code == 404


def test_list_projects_paginated(client):
    for i in range(12):
        create(client, name=f"Project {i}")

    body = client.get(BASE, params={"page": 0, "size": 5}).json()
    assert len(body["projects"]) == 5
    assert body["totalPages"] == 3
    assert body["totalElements"] == 12
    assert body["hasNext"] is True
    assert body["hasPrevious"] is False
    assert set(body["projects"][0]) == {"id", "name", "updatedAt"}

    body = client.get(BASE, params={"page": 2, "size": 5}).json()
    assert len(body["projects"]) == 2
    assert body["hasNext"] is False
    assert body["hasPrevious"] is True


def test_list_projects_defaults_and_bounds(client):
    create(client)

    body = client.get(BASE).json()
    assert body["currentPage"] == 0
    assert body["size"] == 5

    assert client.get(BASE, params={"page": 9}).json()["projects"] == []
    resp = client.get(BASE, params={"page": 2**62, "size": 5})
    assert resp.status_code == 200
    assert resp.json()["projects"] == []
    assert client.get(BASE, params={"page": -1}).status_code == 422
    assert client.get(BASE, params={"size": 0}).status_code == 422


def test_list_all_projects(client):
    create(client, name="First")
    create(client, name="Second")

    body = client.get(f"{BASE}/all").json()

    assert {p["name"] for p in body} == {"First", "Second"}


def test_timestamps_carry_utc_offset(client):
    created = create(client)

    fetched = client.get(f"{BASE}/{created['id']}").json()
    listed = client.get(BASE).json()["projects"][0]

    for ts in (fetched["createdAt"], fetched["updatedAt"], listed["updatedAt"]):
        assert datetime.fromisoformat(ts.replace("Z", "+00:00")).utcoffset() == timedelta(0)
