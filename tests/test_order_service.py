from datetime import datetime
from decimal import Decimal

import pytest
from sqlmodel import Session, select

from app.errors import ConstraintViolation, DuplicateIdentity, RecordNotFound
from app.models.order_item import Item
from app.schemas.orders_schemas import OrderCreate, OrderPatch
from app.services.order_service import OrderService
from app.services.order_store import AddItem, OrderStore, RemoveItem, UpdateItem, UpdateOrderFields
from app.services.store_outcomes import NotFound


def new_order(order_id="ORD-1", items=((1, "10", 2),)):
    return OrderCreate(
        order_id=order_id,
        value=Decimal("20"),
        creation_date=datetime(2025, 1, 15, 10, 30),
        items=[
            {"product_id": product_id, "price": price, "quantity": quantity}
            for product_id, price, quantity in items
        ],
    )


def products(order):
    return sorted((item.product_id, item.price, item.quantity) for item in order.items)


@pytest.fixture
def service(session):
    return OrderService(session)


def test_create_then_get_returns_submitted_items(service, owner):
    service.create(new_order(items=((1, "10", 2), (2, "5.5", 3))), owner.id)

    order = service.get("ORD-1", include_items=True)

    assert order.user_id == owner.id
    assert products(order) == [(1, Decimal("10"), 2), (2, Decimal("5.5"), 3)]


def test_get_unknown_is_none(service):
    assert service.get("missing") is None


def test_list_empty_store(service):
    assert service.list() == []
    assert service.list(include_items=True) == []


def test_create_duplicate_persists_nothing_new(service, engine, owner):
    service.create(new_order(), owner.id)

    # a second request gets its own session
    with Session(engine, expire_on_commit=False) as other:
        with pytest.raises(DuplicateIdentity):
            OrderService(other).create(new_order(items=((5, "1", 1), (6, "1", 1))), owner.id)

    with Session(engine) as fresh:
        items = fresh.exec(select(Item)).all()
    assert [item.product_id for item in items] == [1]


def test_create_for_missing_owner_is_constraint_violation(service):
    with pytest.raises(ConstraintViolation):
        service.create(new_order(), owner_user_id=424242)

    assert service.get("ORD-1") is None


def test_patch_remove_leaves_the_rest(service, owner):
    service.create(new_order(items=((1, "10", 2), (2, "5", 1), (3, "1", 9))), owner.id)

    order = service.patch("ORD-1", OrderPatch(remove_items=[2, 77]))

    assert [item.product_id for item in sorted(order.items, key=lambda i: i.product_id)] == [1, 3]


def test_patch_rolls_back_add_when_update_target_missing(service, session, owner):
    service.create(new_order(), owner.id)

    with pytest.raises(RecordNotFound):
        service.patch(
            "ORD-1",
            OrderPatch(
                add_items=[{"product_id": 2, "price": "5", "quantity": 1}],
                update_items=[{"product_id": 99, "quantity": 3}],
            ),
        )

    session.expire_all()
    assert products(service.get("ORD-1", include_items=True)) == [(1, Decimal("10"), 2)]


def test_patch_update_without_values_checks_existence(service, owner):
    service.create(new_order(), owner.id)

    assert products(service.patch("ORD-1", OrderPatch(update_items=[{"product_id": 1}]))) == [
        (1, Decimal("10"), 2)
    ]
    with pytest.raises(RecordNotFound):
        service.patch("ORD-1", OrderPatch(update_items=[{"product_id": 2}]))


def test_patch_duplicate_add_is_duplicate_identity(service, owner):
    service.create(new_order(), owner.id)

    with pytest.raises(DuplicateIdentity):
        service.patch("ORD-1", OrderPatch(add_items=[{"product_id": 1, "price": "3", "quantity": 1}]))


def test_patch_unknown_order(service):
    with pytest.raises(RecordNotFound):
        service.patch("nope", OrderPatch(value=Decimal("1")))


def test_patch_changes_date_and_keeps_value(service, owner):
    service.create(new_order(), owner.id)

    order = service.patch("ORD-1", OrderPatch(creation_date=datetime(2024, 12, 31, 23, 59)))

    assert order.creation_date.replace(tzinfo=None) == datetime(2024, 12, 31, 23, 59)
    assert order.value == Decimal("20")


def test_delete_returns_snapshot_and_cascades(service, engine, owner):
    service.create(new_order(items=((1, "10", 2), (2, "5", 1))), owner.id)

    deleted = service.delete("ORD-1")

    assert deleted.order_id == "ORD-1"
    assert [item.product_id for item in sorted(deleted.items, key=lambda i: i.product_id)] == [1, 2]
    with Session(engine) as session:
        assert session.exec(select(Item)).all() == []
    assert service.get("ORD-1") is None


def test_delete_unknown_is_none(service):
    assert service.delete("nope") is None


def test_pending_operations_follow_patch_order():
    delta = OrderPatch(
        value=Decimal("12"),
        remove_items=[4],
        add_items=[{"product_id": 5, "price": "1", "quantity": 1}],
        update_items=[{"product_id": 6, "price": "2"}],
    )

    operations = OrderService.pending_operations(delta)

    assert operations == [
        UpdateOrderFields({"value": Decimal("12")}),
        RemoveItem(4),
        AddItem(5, Decimal("1"), 1),
        UpdateItem(6, {"price": Decimal("2")}),
    ]


def test_empty_patch_has_no_operations():
    assert OrderService.pending_operations(OrderPatch()) == []


def test_patch_of_order_deleted_before_reload_is_not_found(service, session, owner, monkeypatch):
    service.create(new_order(), owner.id)
    # another request removes the order between the commit and the reload
    monkeypatch.setattr(OrderStore, "get", lambda self, order_id, include_items=False: None)

    outcome = OrderStore(session).apply("ORD-1", [UpdateOrderFields({"value": Decimal("5")})])
    assert isinstance(outcome, NotFound)

    with pytest.raises(RecordNotFound):
        service.patch("ORD-1", OrderPatch(value=Decimal("6")))
