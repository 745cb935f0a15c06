# flyer_backend/services/project_service.py
import logging
import uuid
from datetime import datetime, timezone

from sqlmodel import Session

from flyer_backend.core.errors import ValidationError
from flyer_backend.core.image_paths import derive_group_image
from flyer_backend.database import unit_of_work
from flyer_backend.models.project import (
    FlyerConfig,
    FlyerGroup,
    FlyerProduct,
    FlyerProject,
)
from flyer_backend.repositories.project_repo import ProjectRepository
from flyer_backend.schemas.common import quantize_price
from flyer_backend.schemas.project import (
    FlyerConfigPayload,
    FlyerConfigRead,
    GroupPayload,
    GroupRead,
    PagedProjects,
    ProductRead,
    ProjectPayload,
    ProjectRead,
    ProjectSummary,
)

logger = logging.getLogger(__name__)

CONFIG_FIELDS = (
    "title",
    "header_text",
    "footer_text",
    "header_image_url",
    "footer_image_url",
    "background_color",
    "primary_color",
    "secondary_color",
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_project_payload(payload: ProjectPayload) -> None:
    """
    Business checks shared by every project save path.

    Raises:
        ValidationError: empty name, or a group without products.
    """
    if not payload.name or not payload.name.strip():
        raise ValidationError("Project name cannot be empty")

    for idx, group in enumerate(payload.groups):
        if not group.products:
            raise ValidationError(f"Group #{idx} ({group.title or group.type}) has no products")


def config_to_dto(config) -> FlyerConfigRead:
    return FlyerConfigRead(id=config.id, **{f: getattr(config, f) for f in CONFIG_FIELDS})


def apply_config(config, payload: FlyerConfigPayload) -> None:
    """
    Copy every presentation field onto an existing config row.
    """
    for field in CONFIG_FIELDS:
        setattr(config, field, getattr(payload, field))


class ProjectService:
    """
    Business logic for the flyer project aggregate.

    Responsibilities:
      - validation before any write
      - building config / groups / products from the payload
      - group image derivation from the first product code
      - full replace of groups on update
      - created_at / updated_at stamping
      - paginated listing and response assembly
    """

    def __init__(self, repo: ProjectRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _build_groups(
        project_id: uuid.UUID,
        payloads: list[GroupPayload],
    ) -> tuple[list[FlyerGroup], list[FlyerProduct]]:
        """
        Build group rows (input order) and their product rows (list order).
        """
        groups: list[FlyerGroup] = []
        products: list[FlyerProduct] = []

        for g in payloads:
            group = FlyerGroup(
                project_id=project_id,
                group_type=g.type,
                title=g.title,
                image=g.image or derive_group_image(g.products),
                position=g.position,
                flyer_page=g.flyer_page,
            )
            groups.append(group)

            for idx, p in enumerate(g.products):
                products.append(
                    FlyerProduct(
                        group_id=group.id,
                        sort_order=idx,
                        code=p.code,
                        description=p.description,
                        specifications=p.specifications,
                        price=quantize_price(p.price),
                        category=p.category,
                    )
                )

        return groups, products

    def _build_project_dto(self, session: Session, project: FlyerProject) -> ProjectRead:
        config = self.repo.get_config(session, project.id)
        groups = self.repo.list_groups(session, project.id)
        products = self.repo.list_products_for_groups(session, [g.id for g in groups])

        products_by_group: dict[uuid.UUID, list[ProductRead]] = {g.id: [] for g in groups}
        for p in products:
            products_by_group[p.group_id].append(
                ProductRead(
                    id=p.id,
                    code=p.code,
                    description=p.description,
                    specifications=p.specifications,
                    price=p.price,
                    category=p.category,
                )
            )

        return ProjectRead(
            id=project.id,
            name=project.name,
            config=config_to_dto(config) if config else None,
            groups=[
                GroupRead(
                    id=g.id,
                    type=g.group_type,
                    title=g.title,
                    image=g.image,
                    position=g.position,
                    flyer_page=g.flyer_page,
                    products=products_by_group[g.id],
                )
                for g in groups
            ],
            created_at=project.created_at,
            updated_at=project.updated_at,
        )

    # ----- Queries -----

    def get_project(self, session: Session, project_id: uuid.UUID) -> ProjectRead | None:
        project = self.repo.get_by_id(session, project_id)
        if project is None:
            return None
        return self._build_project_dto(session, project)

    def list_projects(self, session: Session, page: int = 0, size: int = 5) -> PagedProjects:
        """
        Page through project summaries, most recently updated first.

        A page past the end yields an empty list, not an error.
        """
        if page < 0:
            raise ValidationError("page must be >= 0")
        if size < 1:
            raise ValidationError("size must be >= 1")

        total = self.repo.count(session)
        total_pages = (total + size - 1) // size
        projects = []
        # Offsets past the end never reach the database
        if page < total_pages:
            projects = self.repo.list_page(session, skip=page * size, limit=size)

        return PagedProjects(
            projects=[
                ProjectSummary(id=p.id, name=p.name, updated_at=p.updated_at)
                for p in projects
            ],
            current_page=page,
            total_pages=total_pages,
            total_elements=total,
            size=size,
            has_next=page + 1 < total_pages,
            has_previous=page > 0,
        )

    def list_all_projects(self, session: Session) -> list[ProjectSummary]:
        return [
            ProjectSummary(id=p.id, name=p.name, updated_at=p.updated_at)
            for p in self.repo.list_all(session)
        ]

    # ----- Commands -----

    def save_project(self, session: Session, payload: ProjectPayload) -> ProjectRead:
        """
        Create a project with its config, groups and products in one commit.

        Steps:
          1. Validate name and group contents.
          2. Insert project (created_at == updated_at == now).
          3. Insert config.
          4. Insert groups in input order, then their products.
          5. Commit and return the full aggregate.
        """
        validate_project_payload(payload)

        now = utcnow()
        project = FlyerProject(name=payload.name, created_at=now, updated_at=now)

        with unit_of_work(session, "save project"):
            self.repo.add_project(session, project)

            config = FlyerConfig(project_id=project.id)
            apply_config(config, payload.config)
            self.repo.save_config(session, config)

            groups, products = self._build_groups(project.id, payload.groups)
            self.repo.add_groups(session, groups, products)

        logger.info(
            "Saved project %s (%d groups, %d products)",
            project.id,
            len(groups),
            len(products),
        )
        session.refresh(project)
        return self._build_project_dto(session, project)

    def update_project(
        self,
        session: Session,
        project_id: uuid.UUID,
        payload: ProjectPayload,
    ) -> ProjectRead | None:
        """
        Replace name, config fields and the whole group list of a project.

        - Returns None if the project does not exist.
        - Config is updated in place and keeps its id.
        - Old groups and their products are deleted, never merged.
        """
        project = self.repo.get_by_id(session, project_id)
        if project is None:
            return None

        validate_project_payload(payload)

        with unit_of_work(session, "update project"):
            project.name = payload.name
            project.updated_at = utcnow()

            config = self.repo.get_config(session, project.id)
            if config is None:
                config = FlyerConfig(project_id=project.id)
            apply_config(config, payload.config)
            self.repo.save_config(session, config)

            removed = self.repo.delete_groups(session, project.id)
            groups, products = self._build_groups(project.id, payload.groups)
            self.repo.add_groups(session, groups, products)

            self.repo.add_project(session, project)

        logger.info(
            "Updated project %s (replaced %d groups with %d)",
            project.id,
            removed,
            len(groups),
        )
        session.refresh(project)
        return self._build_project_dto(session, project)

    def delete_project(self, session: Session, project_id: uuid.UUID) -> bool:
        """
        Delete a project and everything it owns.

        Returns False if the project does not exist.
        """
        project = self.repo.get_by_id(session, project_id)
        if project is None:
            return False

        with unit_of_work(session, "delete project"):
            self.repo.delete_project(session, project)

        logger.info("Deleted project %s", project_id)
        return True
