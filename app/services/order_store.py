# app/services/order_store.py
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence, Union

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from app.models.order import Order
from app.models.order_item import Item
from app.services.store_outcomes import (
    NotFound,
    StoreOutcome,
    Success,
    classify_integrity_error,
)


def order_not_found(order_id: str) -> NotFound:
    return NotFound(f'Order: "{order_id}" not found.')


# -------- Pending operations --------
# A patch is a list of these, executed in order inside one transaction.
# run() returns None to continue, or an outcome that aborts the transaction.

@dataclass(frozen=True)
class UpdateOrderFields:
    values: dict = field(default_factory=dict)

    def run(self, session: Session, order_id: str) -> Optional[StoreOutcome]:
        session.execute(
            update(Order).where(Order.order_id == order_id).values(**self.values)
        )
        return None


@dataclass(frozen=True)
class RemoveItem:
    product_id: int

    def run(self, session: Session, order_id: str) -> Optional[StoreOutcome]:
        # deleting a product the order does not carry matches no rows
        session.execute(
            delete(Item).where(
                Item.order_id == order_id,
                Item.product_id == self.product_id,
            )
        )
        return None


@dataclass(frozen=True)
class AddItem:
    product_id: int
    price: Decimal
    quantity: int

    def run(self, session: Session, order_id: str) -> Optional[StoreOutcome]:
        session.execute(
            insert(Item).values(
                order_id=order_id,
                product_id=self.product_id,
                price=self.price,
                quantity=self.quantity,
            )
        )
        return None


@dataclass(frozen=True)
class UpdateItem:
    product_id: int
    values: dict = field(default_factory=dict)

    def run(self, session: Session, order_id: str) -> Optional[StoreOutcome]:
        where = (Item.order_id == order_id, Item.product_id == self.product_id)
        if self.values:
            matched = session.execute(update(Item).where(*where).values(**self.values)).rowcount
        else:
            matched = len(session.exec(select(Item.product_id).where(*where)).all())
        if not matched:
            return NotFound(f'Item {self.product_id} not found on order "{order_id}".')
        return None


PendingOperation = Union[UpdateOrderFields, RemoveItem, AddItem, UpdateItem]


class OrderStore:
    """Persistence for orders and their items; every write is one transaction."""

    def __init__(self, session: Session):
        self.session = session

    def insert(self, order: Order) -> StoreOutcome:
        """Insert an order together with the items attached to it."""
        try:
            self.session.add(order)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            outcome = classify_integrity_error(exc)
            if outcome is None:
                raise
            return outcome
        return Success(order)

    def get(self, order_id: str, include_items: bool = False) -> Optional[Order]:
        statement = select(Order).where(Order.order_id == order_id)
        if include_items:
            statement = statement.options(selectinload(Order.items))
        return self.session.exec(statement).first()

    def list(self, include_items: bool = False) -> List[Order]:
        statement = select(Order).order_by(Order.order_id)
        if include_items:
            statement = statement.options(selectinload(Order.items))
        return list(self.session.exec(statement).all())

    def apply(self, order_id: str, operations: Sequence[PendingOperation]) -> StoreOutcome:
        """
        Run pending operations against one order, all or nothing.

        Returns Success(order with items) after commit, or the first failing
        outcome after rolling everything back.
        """
        try:
            if self.session.get(Order, order_id) is None:
                self.session.rollback()
                return order_not_found(order_id)

            for operation in operations:
                outcome = operation.run(self.session, order_id)
                if outcome is not None:
                    self.session.rollback()
                    return outcome

            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            outcome = classify_integrity_error(exc)
            if outcome is None:
                raise
            return outcome

        # bulk statements bypass the identity map; reload from the database
        self.session.expire_all()
        order = self.get(order_id, include_items=True)
        if order is None:
            # deleted by another request after the commit
            return order_not_found(order_id)
        return Success(order)

    def delete(self, order_id: str) -> StoreOutcome:
        """Delete an order and its items; Success carries the deleted order."""
        order = self.get(order_id, include_items=True)
        if order is None:
            return order_not_found(order_id)

        self.session.delete(order)
        self.session.commit()
        return Success(order)
