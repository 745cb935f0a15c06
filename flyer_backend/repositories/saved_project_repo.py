# flyer_backend/repositories/saved_project_repo.py
import uuid
from collections.abc import Iterable

from sqlmodel import Session, select

from flyer_backend.models.product import Product
from flyer_backend.models.saved_project import (
    CatalogConfig,
    CatalogGroup,
    CatalogGroupMember,
    SavedProject,
    SavedProjectGroup,
    SavedProjectProduct,
)


class SavedProjectRepository:
    """
    Data access layer for saved projects built on the shared catalog.

    NOTE:
      - No commits here; the service owns the transaction.
      - Association rows carry a sort_order so reads keep request order.
    """

    # ---- Writes ----

    def add(self, session: Session, entity):
        """
        Insert a config, group or project row and flush to assign its id.
        """
        session.add(entity)
        session.flush()
        return entity

    def add_group_members(
        self,
        session: Session,
        group_id: uuid.UUID,
        products: list[Product],
    ) -> None:
        session.add_all(
            [
                CatalogGroupMember(group_id=group_id, product_id=p.id, sort_order=idx)
                for idx, p in enumerate(products)
            ]
        )
        session.flush()

    def link_groups(
        self,
        session: Session,
        project_id: uuid.UUID,
        groups: list[CatalogGroup],
    ) -> None:
        session.add_all(
            [
                SavedProjectGroup(project_id=project_id, group_id=g.id, sort_order=idx)
                for idx, g in enumerate(groups)
            ]
        )
        session.flush()

    def link_products(
        self,
        session: Session,
        project_id: uuid.UUID,
        products: list[Product],
    ) -> None:
        session.add_all(
            [
                SavedProjectProduct(project_id=project_id, product_id=p.id, sort_order=idx)
                for idx, p in enumerate(products)
            ]
        )
        session.flush()

    # ---- Reads ----

    def list_all(self, session: Session) -> list[SavedProject]:
        stmt = select(SavedProject).order_by(SavedProject.created_at.desc())
        return session.exec(stmt).all()

    def get_config(self, session: Session, config_id: uuid.UUID) -> CatalogConfig | None:
        return session.get(CatalogConfig, config_id)

    def list_groups(self, session: Session, project_id: uuid.UUID) -> list[CatalogGroup]:
        stmt = (
            select(CatalogGroup)
            .join(SavedProjectGroup, SavedProjectGroup.group_id == CatalogGroup.id)
            .where(SavedProjectGroup.project_id == project_id)
            .order_by(SavedProjectGroup.sort_order)
        )
        return session.exec(stmt).all()

    def list_group_members(
        self,
        session: Session,
        group_ids: Iterable[uuid.UUID],
    ) -> list[tuple[uuid.UUID, Product]]:
        """
        (group_id, product) pairs, in member order.
        """
        group_ids = list(group_ids)
        if not group_ids:
            return []
        stmt = (
            select(CatalogGroupMember.group_id, Product)
            .join(Product, Product.id == CatalogGroupMember.product_id)
            .where(CatalogGroupMember.group_id.in_(group_ids))
            .order_by(CatalogGroupMember.sort_order)
        )
        return session.exec(stmt).all()

    def list_products(self, session: Session, project_id: uuid.UUID) -> list[Product]:
        stmt = (
            select(Product)
            .join(SavedProjectProduct, SavedProjectProduct.product_id == Product.id)
            .where(SavedProjectProduct.project_id == project_id)
            .order_by(SavedProjectProduct.sort_order)
        )
        return session.exec(stmt).all()
