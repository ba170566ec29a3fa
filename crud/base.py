from __future__ import annotations
from typing import Generic, Optional, Sequence, Type, TypeVar
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from models import Base

ModelT = TypeVar("ModelT", bound=Base)


class CRUDRepository(Generic[ModelT]):
    """
    Generic CRUD over one mapped class.

    Writes only flush; call commit() to make a batch durable. Missing rows come
    back as None / False, storage errors propagate untouched.
    """

    def __init__(self, model: Type[ModelT], db: Session):
        self.model = model
        self.db = db

    def _select(self):
        return select(self.model)

    def get(self, obj_id: int) -> Optional[ModelT]:
        return self.db.scalar(self._select().where(self.model.id == obj_id))

    def get_all(self) -> Sequence[ModelT]:
        return self.db.scalars(self._select().order_by(self.model.id)).all()

    def get_paged(self, page_number: int, page_size: int) -> Sequence[ModelT]:
        stmt = (
            self._select()
            .order_by(self.model.id)
            .offset((page_number - 1) * page_size)
            .limit(page_size)
        )
        return self.db.scalars(stmt).all()

    def count(self) -> int:
        return self.db.scalar(select(func.count()).select_from(self.model)) or 0

    def create(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        self.db.flush()
        return obj

    def update(self, obj: ModelT) -> ModelT:
        self.db.add(obj)
        self.db.flush()
        return obj

    def delete(self, obj_id: int) -> bool:
        obj = self.db.get(self.model, obj_id)
        if not obj:
            return False
        self.db.delete(obj)
        self.db.flush()
        return True

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
