from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session


class ResourceStore:
    """Thin persistence facade over one mapped model."""

    def __init__(self, db: Session, model):
        self.db = db
        self.model = model

    def query(self):
        return self.db.query(self.model)

    def find_by_id(self, resource_id: int):
        return self.db.get(self.model, resource_id)

    def find_one(self, **filters):
        return self.query().filter_by(**filters).first()

    def find(self, *criteria):
        return self.query().filter(*criteria).all()

    def create(self, **fields):
        instance = self.model(**fields)
        self.db.add(instance)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(instance)
        return instance

    def update_by_id(self, resource_id: int, patch: Dict[str, Any]):
        instance = self.find_by_id(resource_id)
        if instance is None:
            return None
        for field, value in patch.items():
            setattr(instance, field, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(instance)
        return instance

    def delete_by_id(self, resource_id: int) -> bool:
        instance = self.find_by_id(resource_id)
        if instance is None:
            return False
        self.db.delete(instance)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return True

    def delete_many(self, **filters) -> int:
        try:
            deleted = self.query().filter_by(**filters).delete(synchronize_session=False)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return deleted

    def aggregate_mean(self, field: str, **filters) -> Optional[float]:
        column = getattr(self.model, field)
        return (
            self.db.query(func.avg(column))
            .filter(*[getattr(self.model, key) == value for key, value in filters.items()])
            .scalar()
        )
