"""Category persistence."""

from sqlalchemy.orm import Session

from src.models.category import Category


class SqlCategoryRepository:
    """Recipe categories, read-only through the API."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Category]:
        return self.db.query(Category).order_by(Category.name).all()

    def exists(self, category_id: int) -> bool:
        return self.db.query(Category.id).filter(Category.id == category_id).first() is not None
