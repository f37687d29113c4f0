from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from typing import List
from datetime import datetime
from decimal import Decimal

from app.models.order_item import Item


class Order(SQLModel, table=True):
    # caller-supplied order number, e.g. "ORD-2025-001"
    order_id: str = Field(primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)

    value: Decimal = Field(max_digits=12, decimal_places=2)
    creation_date: datetime = Field(sa_type=DateTime(timezone=True))

    items: List["Item"] = Relationship(
        back_populates="order",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )
