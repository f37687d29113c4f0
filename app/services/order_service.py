# app/services/order_service.py
"""
Order mutation engine.

Creates, reads, patches and deletes an order together with its items. Each
write goes to the store as a single transaction; store outcomes are turned
into the API's error types here.
"""
import logging
from typing import List, Optional

from sqlmodel import Session

from app.errors import (
    ConstraintViolation,
    DuplicateIdentity,
    MissingRequiredField,
    RecordNotFound,
)
from app.models.order import Order
from app.models.order_item import Item
from app.schemas.orders_schemas import OrderCreate, OrderPatch
from app.services.order_store import (
    AddItem,
    OrderStore,
    PendingOperation,
    RemoveItem,
    UpdateItem,
    UpdateOrderFields,
)
from app.services.store_outcomes import (
    ForeignKeyViolation,
    NotFound,
    NullViolation,
    StoreOutcome,
    Success,
    UniqueViolation,
)

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, session: Session):
        self.store = OrderStore(session)

    def create(self, payload: OrderCreate, owner_user_id: int) -> Order:
        order = Order(
            order_id=payload.order_id,
            user_id=owner_user_id,
            value=payload.value,
            creation_date=payload.creation_date,
            items=[
                Item(product_id=item.product_id, price=item.price, quantity=item.quantity)
                for item in payload.items
            ],
        )

        outcome = self.store.insert(order)
        if isinstance(outcome, Success):
            logger.info(f"Order {payload.order_id} created with {len(payload.items)} items")
            return outcome.value

        logger.info(f"Create order {payload.order_id} rejected: {type(outcome).__name__}")
        if isinstance(outcome, UniqueViolation):
            raise DuplicateIdentity("A record with this order_id already exists")
        if isinstance(outcome, NullViolation):
            raise MissingRequiredField("Order requires an order_id")
        if isinstance(outcome, ForeignKeyViolation):
            raise ConstraintViolation("Order owner does not exist")
        raise ConstraintViolation(outcome.detail)

    def get(self, order_id: str, include_items: bool = False) -> Optional[Order]:
        return self.store.get(order_id, include_items=include_items)

    def list(self, include_items: bool = False) -> List[Order]:
        return self.store.list(include_items=include_items)

    def patch(self, order_id: str, delta: OrderPatch) -> Order:
        outcome = self.store.apply(order_id, self.pending_operations(delta))
        if isinstance(outcome, Success):
            logger.info(f"Order {order_id} patched")
            return outcome.value

        logger.info(f"Patch order {order_id} rejected: {type(outcome).__name__}")
        self._raise_for(outcome)

    @staticmethod
    def pending_operations(delta: OrderPatch) -> List[PendingOperation]:
        """Order fields first, then removals, additions and item updates."""
        operations: List[PendingOperation] = []

        # fields left out of the request are not touched
        fields = delta.model_dump(include={"value", "creation_date"}, exclude_none=True)
        if fields:
            operations.append(UpdateOrderFields(fields))

        operations += [RemoveItem(product_id) for product_id in delta.remove_items]
        operations += [
            AddItem(item.product_id, item.price, item.quantity)
            for item in delta.add_items
        ]
        operations += [
            UpdateItem(
                item.product_id,
                item.model_dump(include={"price", "quantity"}, exclude_none=True),
            )
            for item in delta.update_items
        ]
        return operations

    def delete(self, order_id: str) -> Optional[Order]:
        outcome = self.store.delete(order_id)
        if isinstance(outcome, NotFound):
            return None
        logger.info(f"Order {order_id} deleted")
        return outcome.value

    @staticmethod
    def _raise_for(outcome: StoreOutcome):
        if isinstance(outcome, NotFound):
            raise RecordNotFound(outcome.detail)
        if isinstance(outcome, UniqueViolation):
            raise DuplicateIdentity("Item already exists on this order")
        if isinstance(outcome, NullViolation):
            raise MissingRequiredField("Item requires a product_id, price and quantity")
        if isinstance(outcome, ForeignKeyViolation):
            raise ConstraintViolation("Item references an order that does not exist")
        raise ConstraintViolation(str(outcome))
