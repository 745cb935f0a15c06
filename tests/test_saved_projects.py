from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func
from sqlmodel import select

from flyer_backend.core.errors import ValidationError
from flyer_backend.models.product import Product
from flyer_backend.models.saved_project import CatalogGroup, SavedProject
from flyer_backend.repositories.product_repo import ProductRepository
from flyer_backend.repositories.saved_project_repo import SavedProjectRepository
from flyer_backend.schemas.saved_project import SavedProjectPayload
from flyer_backend.services.saved_project_service import SavedProjectService

from factories import group, product, project_payload

BASE = "/api/v1/saved-projects"


@pytest.fixture
def service():
    return SavedProjectService(SavedProjectRepository(), ProductRepository())


def payload(products=(), **kwargs) -> SavedProjectPayload:
    return SavedProjectPayload.model_validate(
        project_payload(products=[product(c) for c in products], **kwargs)
    )


def count(session, model) -> int:
    return session.exec(select(func.count()).select_from(model)).one()


def test_same_code_standalone_and_in_group_is_stored_once(session, service):
    saved = service.save(
        session,
        payload(products=["ABC123", "LOOSE"], groups=[group("ABC123", "XYZ9")]),
    )

    assert count(session, Product) == 3
    codes = [p.code for p in saved.products]
    assert sorted(codes) == ["ABC123", "LOOSE", "XYZ9"]
    assert len(codes) == len(set(codes))


def test_same_code_in_two_groups_is_stored_once(session, service):
    saved = service.save(
        session,
        payload(groups=[group("A1", "B1"), group("A1", position=1)]),
    )

    assert count(session, Product) == 2
    assert saved.groups[0].products[0].id == saved.groups[1].products[0].id


def test_existing_catalog_product_is_reused(session, service):
    existing = Product(code="ABC123", description="From import", price=Decimal("5.00"))
    session.add(existing)
    session.commit()

    saved = service.save(session, payload(groups=[group("ABC123")]))

    assert count(session, Product) == 1
    assert saved.groups[0].products[0].id == existing.id
    assert saved.groups[0].products[0].description == "From import"


def test_groups_are_always_created(session, service):
    service.save(session, payload(groups=[group("A1")]))
    service.save(session, payload(groups=[group("A1")]))

    assert count(session, CatalogGroup) == 2
    assert count(session, SavedProject) == 2
    assert count(session, Product) == 1


def test_save_expands_nested_entities(session, service):
    saved = service.save(session, payload(groups=[group("ABC123", "XYZ9", type="same-price")]))

    assert saved.created_at == saved.updated_at
    assert saved.config.title == "Ofertas"
    g = saved.groups[0]
    assert g.type == "same-price"
    assert g.image == "imagens_produtos/ABC123.png"
    assert [p.code for p in g.products] == ["ABC123", "XYZ9"]


def test_save_validates_before_writing(session, service):
    with pytest.raises(ValidationError):
        service.save(session, payload(name=""))
    with pytest.raises(ValidationError):
        service.save(session, payload(groups=[{"type": "single", "products": []}]))

    assert count(session, Product) == 0
    assert count(session, SavedProject) == 0


def test_api_save_and_list(client):
    body = project_payload(groups=[group("G1")])
    body["products"] = [product("G1"), product("S1")]

    resp = client.post(BASE, json=body)

    assert resp.status_code == 201
    saved = resp.json()
    assert {p["code"] for p in saved["products"]} == {"G1", "S1"}
    assert saved["groups"][0]["image"] == "imagens_produtos/G1.png"

    listed = client.get(BASE).json()
    assert [p["id"] for p in listed] == [saved["id"]]


def test_save_keeps_flyer_page(session, service):
    saved = service.save(
        session,
        payload(groups=[group("A1", flyerPage=2), group("B1", position=1)]),
    )

    assert [g.flyer_page for g in saved.groups] == [2, None]
    assert [g.flyer_page for g in service.list_saved(session)[0].groups] == [2, None]


def test_api_timestamps_carry_utc_offset(client):
    resp = client.post(BASE, json=project_payload(groups=[group("G1", flyerPage=3)]))

    saved = resp.json()
    assert saved["groups"][0]["flyerPage"] == 3
    listed = client.get(BASE).json()[0]
    for ts in (listed["createdAt"], listed["updatedAt"]):
        assert datetime.fromisoformat(ts.replace("Z", "+00:00")).utcoffset() == timedelta(0)
