from pydantic import AliasChoices, BaseModel, ConfigDict, Field, conint, model_validator
from typing import List, Optional
from datetime import datetime
from decimal import Decimal

# Every input field also accepts the legacy wire name
# (numeroPedido, valorTotal, dataCriacao, idItem, valorItem, quantidadeItem).

# Item columns are 32-bit INTEGER
INT32_MAX = 2**31 - 1


class ItemCreate(BaseModel):
    product_id: int = Field(ge=0, le=INT32_MAX, validation_alias=AliasChoices("product_id", "idItem"))
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2,
                         validation_alias=AliasChoices("price", "valorItem"))
    quantity: int = Field(gt=0, le=INT32_MAX, validation_alias=AliasChoices("quantity", "quantidadeItem"))


class OrderCreate(BaseModel):
    order_id: str = Field(min_length=1, max_length=100,
                          validation_alias=AliasChoices("order_id", "numeroPedido"))
    value: Decimal = Field(ge=0, max_digits=12, decimal_places=2,
                         validation_alias=AliasChoices("value", "valorTotal"))
    creation_date: datetime = Field(validation_alias=AliasChoices("creation_date", "dataCriacao"))
    items: List[ItemCreate] = Field(min_length=1)

    @model_validator(mode="after")
    def validate_unique_products(self):
        product_ids = [item.product_id for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValueError("Each product_id may appear only once per order")
        return self


class ItemUpdate(BaseModel):
    product_id: int = Field(ge=0, le=INT32_MAX, validation_alias=AliasChoices("product_id", "idItem"))
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2,
                                   validation_alias=AliasChoices("price", "valorItem"))
    quantity: Optional[int] = Field(default=None, gt=0, le=INT32_MAX,
                                    validation_alias=AliasChoices("quantity", "quantidadeItem"))


class OrderPatch(BaseModel):
    value: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2,
                                   validation_alias=AliasChoices("value", "valorTotal"))
    creation_date: Optional[datetime] = Field(default=None,
                                              validation_alias=AliasChoices("creation_date", "dataCriacao"))

    remove_items: List[conint(ge=0, le=INT32_MAX)] = Field(default_factory=list,
                                                          validation_alias=AliasChoices("remove_items", "removeItems"))
    add_items: List[ItemCreate] = Field(default_factory=list,
                                        validation_alias=AliasChoices("add_items", "addItems"))
    update_items: List[ItemUpdate] = Field(default_factory=list,
                                           validation_alias=AliasChoices("update_items", "updateItems"))


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    product_id: int
    price: Decimal
    quantity: int


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    order_id: str
    user_id: int
    value: Decimal
    creation_date: datetime
    items: Optional[List[ItemResponse]] = None


class DeletedOrderResponse(BaseModel):
    deleted: OrderResponse


def order_response(order, include_items: bool = True) -> OrderResponse:
    response = OrderResponse(
        order_id=order.order_id,
        user_id=order.user_id,
        value=order.value,
        creation_date=order.creation_date,
    )
    if include_items:
        items = sorted(order.items, key=lambda item: item.product_id)
        response.items = [ItemResponse.model_validate(item) for item in items]
    return response
