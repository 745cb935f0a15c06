# flyer_backend/repositories/project_repo.py
import uuid
from collections.abc import Iterable

from sqlalchemy import func
from sqlmodel import Session, select

from flyer_backend.models.project import (
    FlyerConfig,
    FlyerGroup,
    FlyerProduct,
    FlyerProject,
)


class ProjectRepository:
    """
    Data access layer for the flyer project aggregate.

    NOTE:
      - No commits here; saving a project is a multi-step transaction.
        The service is responsible for calling session.commit().
      - Children are linked by stored foreign keys. Deleting a project
        removes products, groups and config explicitly, children first.
    """

    # ---- Projects ----

    def get_by_id(self, session: Session, project_id: uuid.UUID) -> FlyerProject | None:
        return session.get(FlyerProject, project_id)

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(FlyerProject)
        return session.exec(stmt).one()

    def list_page(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 5,
    ) -> list[FlyerProject]:
        stmt = (
            select(FlyerProject)
            .order_by(FlyerProject.updated_at.desc(), FlyerProject.id)
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()

    def list_all(self, session: Session) -> list[FlyerProject]:
        stmt = select(FlyerProject).order_by(FlyerProject.updated_at.desc(), FlyerProject.id)
        return session.exec(stmt).all()

    def add_project(self, session: Session, project: FlyerProject) -> FlyerProject:
        """
        Insert or update a project without committing.
        """
        session.add(project)
        session.flush()
        return project

    def delete_project(self, session: Session, project: FlyerProject) -> None:
        """
        Remove a project together with its config, groups and products.
        """
        self.delete_groups(session, project.id)

        config = self.get_config(session, project.id)
        if config is not None:
            session.delete(config)
            session.flush()

        session.delete(project)
        session.flush()

    # ---- Config ----

    def get_config(self, session: Session, project_id: uuid.UUID) -> FlyerConfig | None:
        stmt = select(FlyerConfig).where(FlyerConfig.project_id == project_id)
        return session.exec(stmt).first()

    def save_config(self, session: Session, config: FlyerConfig) -> FlyerConfig:
        session.add(config)
        session.flush()
        return config

    # ---- Groups & products ----

    def list_groups(self, session: Session, project_id: uuid.UUID) -> list[FlyerGroup]:
        stmt = (
            select(FlyerGroup)
            .where(FlyerGroup.project_id == project_id)
            .order_by(FlyerGroup.position)
        )
        return session.exec(stmt).all()

    def list_products_for_groups(
        self,
        session: Session,
        group_ids: Iterable[uuid.UUID],
    ) -> list[FlyerProduct]:
        group_ids = list(group_ids)
        if not group_ids:
            return []
        stmt = (
            select(FlyerProduct)
            .where(FlyerProduct.group_id.in_(group_ids))
            .order_by(FlyerProduct.sort_order)
        )
        return session.exec(stmt).all()

    def add_groups(
        self,
        session: Session,
        groups: list[FlyerGroup],
        products: list[FlyerProduct],
    ) -> None:
        """
        Insert groups, then their products, without committing.
        """
        session.add_all(groups)
        session.flush()
        session.add_all(products)
        session.flush()

    def delete_groups(self, session: Session, project_id: uuid.UUID) -> int:
        """
        Delete every group of a project and the products they own.

        Returns the number of groups removed.
        """
        groups = self.list_groups(session, project_id)
        products = self.list_products_for_groups(session, [g.id for g in groups])

        for product in products:
            session.delete(product)
        session.flush()

        for group in groups:
            session.delete(group)
        session.flush()

        return len(groups)
