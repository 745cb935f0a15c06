# flyer_backend/services/saved_project_service.py
import logging
import uuid

from sqlmodel import Session

from flyer_backend.core.image_paths import derive_group_image
from flyer_backend.database import unit_of_work
from flyer_backend.models.product import Product
from flyer_backend.models.saved_project import CatalogConfig, CatalogGroup, SavedProject
from flyer_backend.repositories.product_repo import ProductRepository
from flyer_backend.repositories.saved_project_repo import SavedProjectRepository
from flyer_backend.schemas.project import GroupRead, ProductRead
from flyer_backend.schemas.saved_project import SavedProjectPayload, SavedProjectRead
from flyer_backend.services.product_service import ProductLookup
from flyer_backend.services.project_service import (
    apply_config,
    config_to_dto,
    utcnow,
    validate_project_payload,
)

logger = logging.getLogger(__name__)


def _product_dto(p: Product) -> ProductRead:
    return ProductRead(
        id=p.id,
        code=p.code,
        description=p.description,
        specifications=p.specifications,
        price=p.price,
        category=p.category,
    )


class SavedProjectService:
    """
    Saves projects whose products live in the shared catalog.

    Products are resolved by code (reused or created once per code),
    groups are always created anew, and the project links to the
    deduplicated union of every product it references.
    """

    def __init__(self, repo: SavedProjectRepository, product_repo: ProductRepository):
        self.repo = repo
        self.product_repo = product_repo

    def _build_dto(self, session: Session, project: SavedProject) -> SavedProjectRead:
        config = self.repo.get_config(session, project.config_id)
        groups = self.repo.list_groups(session, project.id)

        members: dict[uuid.UUID, list[ProductRead]] = {g.id: [] for g in groups}
        for group_id, product in self.repo.list_group_members(session, members.keys()):
            members[group_id].append(_product_dto(product))

        return SavedProjectRead(
            id=project.id,
            name=project.name,
            config=config_to_dto(config),
            groups=[
                GroupRead(
                    id=g.id,
                    type=g.group_type,
                    title=g.title,
                    image=g.image,
                    position=g.position,
                    flyer_page=g.flyer_page,
                    products=members[g.id],
                )
                for g in groups
            ],
            products=[_product_dto(p) for p in self.repo.list_products(session, project.id)],
            created_at=project.created_at,
            updated_at=project.updated_at,
        )

    def list_saved(self, session: Session) -> list[SavedProjectRead]:
        return [self._build_dto(session, p) for p in self.repo.list_all(session)]

    def save(self, session: Session, payload: SavedProjectPayload) -> SavedProjectRead:
        """
        Steps:
          1. Validate name and group contents.
          2. Insert config.
          3. Resolve standalone products not referenced by any group.
          4. Insert groups; resolve their members by code.
          5. Insert project and link config, groups and unique products.
          6. Commit once.
        """
        validate_project_payload(payload)

        now = utcnow()
        lookup = ProductLookup(self.product_repo, session)

        with unit_of_work(session, "save catalog project"):
            config = CatalogConfig(created_at=now, updated_at=now)
            apply_config(config, payload.config)
            self.repo.add(session, config)

            codes_in_groups = {p.code for g in payload.groups for p in g.products}
            standalone = [
                lookup.get_or_create(p)
                for p in payload.products
                if p.code not in codes_in_groups
            ]

            groups: list[CatalogGroup] = []
            group_products: list[Product] = []
            for g in payload.groups:
                members = [lookup.get_or_create(p) for p in g.products]
                group = self.repo.add(
                    session,
                    CatalogGroup(
                        group_type=g.type,
                        title=g.title,
                        image=g.image or derive_group_image(g.products),
                        position=g.position,
                        flyer_page=g.flyer_page,
                    ),
                )
                self.repo.add_group_members(session, group.id, members)
                groups.append(group)
                group_products.extend(members)

            # Union by identity, first-seen order
            unique: dict[uuid.UUID, Product] = {}
            for product in standalone + group_products:
                unique.setdefault(product.id, product)

            project = self.repo.add(
                session,
                SavedProject(
                    name=payload.name,
                    config_id=config.id,
                    created_at=now,
                    updated_at=now,
                ),
            )
            self.repo.link_groups(session, project.id, groups)
            self.repo.link_products(session, project.id, list(unique.values()))

        logger.info(
            "Saved catalog project %s (%d groups, %d products)",
            project.id,
            len(groups),
            len(unique),
        )
        session.refresh(project)
        return self._build_dto(session, project)
