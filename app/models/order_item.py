from sqlmodel import SQLModel, Field , Relationship
from typing import Optional , TYPE_CHECKING
from decimal import Decimal

if TYPE_CHECKING:
    from app.models.order import Order

class Item(SQLModel, table=True):
    # (product_id, order_id) is the item's identity: one line per product per order
    product_id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    order_id: str = Field(foreign_key="order.order_id", primary_key=True, ondelete="CASCADE")

    price: Decimal = Field(max_digits=12, decimal_places=2)
    quantity: int

    order: Optional["Order"] = Relationship(back_populates="items")
