from typing import Any, Optional

from sqlalchemy.orm import Session


class EntityStore:
    """
    Generic find/create/save/delete access to the persisted entities.

    Writes are flushed immediately so generated ids are available, but
    nothing is committed until ``commit()``: a service operation and its
    cascading table update land in the same transaction.

    Args:
        db (Session): The request's database session.
    """

    def __init__(self, db: Session):
        self.db = db

    def find(self, model, *criteria, order_by=None) -> list:
        query = self.db.query(model)
        if criteria:
            query = query.filter(*criteria)
        if order_by is not None:
            if not isinstance(order_by, (list, tuple)):
                order_by = (order_by,)
            query = query.order_by(*order_by)
        return query.all()

    def find_one(self, model, *criteria) -> Optional[Any]:
        return self.db.query(model).filter(*criteria).first()

    def find_by_id(self, model, entity_id) -> Optional[Any]:
        if entity_id is None:
            return None
        return self.db.get(model, entity_id)

    def create(self, model, **fields):
        entity = model(**fields)
        self.db.add(entity)
        self.db.flush()
        return entity

    def save(self, entity):
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, entity) -> None:
        self.db.delete(entity)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
