# flyer_backend/repositories/product_repo.py
import uuid
from collections.abc import Iterable

from sqlmodel import Session, select

from flyer_backend.models.product import Product


class ProductRepository:
    """
    Data access layer for catalog products.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic, no commits.
    """

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def get_by_code(self, session: Session, code: str) -> Product | None:
        stmt = select(Product).where(Product.code == code)
        return session.exec(stmt).first()

    def get_by_ids(
        self,
        session: Session,
        product_ids: Iterable[uuid.UUID],
    ) -> dict[uuid.UUID, Product]:
        product_ids = list(product_ids)
        if not product_ids:
            return {}
        stmt = select(Product).where(Product.id.in_(product_ids))
        return {p.id: p for p in session.exec(stmt).all()}

    def list(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 50,
    ) -> list[Product]:
        stmt = select(Product).order_by(Product.code).offset(skip).limit(limit)
        return session.exec(stmt).all()

    def add(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.flush()
        return product
