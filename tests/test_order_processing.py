import random

import pytest

from wfnet.errors import TransitionNotAllowedError
from wfnet.examples.order_processing import (
    Inventory,
    Order,
    OrderItem,
    PaymentProcessor,
    build_workflow,
    main,
)


def _order(quantity: int = 2) -> Order:
    return Order(
        id="order-123",
        customer_id="cust-456",
        amount=150.0,
        items=[
            OrderItem(product_id="prod-001", quantity=quantity, price=50.0),
            OrderItem(product_id="prod-002", quantity=1, price=50.0),
        ],
    )


def _processor(rate: float) -> PaymentProcessor:
    return PaymentProcessor(rate, delay=0, rng=random.Random(1))


def test_payment_always_succeeds_with_full_rate():
    processor = _processor(1.0)
    assert all(processor.process_payment(150.0) for _ in range(20))


def test_payment_never_succeeds_with_zero_rate():
    processor = _processor(0.0)
    assert not any(processor.process_payment(150.0) for _ in range(20))


def test_default_inventory_covers_sample_order():
    assert Inventory().has_sufficient_stock(_order().items) is True


def test_inventory_insufficient_for_large_quantity():
    assert Inventory().has_sufficient_stock(_order(quantity=50).items) is False


def test_restock_makes_stock_sufficient():
    inventory = Inventory()
    items = _order(quantity=50).items
    before = dict(inventory.items)
    inventory.restock(items)
    for item in items:
        assert inventory.items[item.product_id] == before[item.product_id] + item.quantity + 2
    assert inventory.has_sufficient_stock(items) is True


def test_build_workflow_sets_context():
    order = _order()
    workflow = build_workflow(order, Inventory(), _processor(1.0))
    assert workflow.name == order.id
    assert workflow.current_places == ["pending"]
    assert workflow.context["order"] is order
    assert workflow.context["order_amount"] == order.amount
    assert workflow.context["customer_id"] == order.customer_id


def test_happy_path_updates_order_status():
    order = _order()
    workflow = build_workflow(order, Inventory(), _processor(1.0))
    for place in ["payment_processing", "payment_approved", "inventory_check", "shipping"]:
        workflow.apply([place])
        assert order.status == place
    workflow.apply(["delivered"])
    assert order.status == "delivered"
    assert workflow.current_places == ["delivered"]


def test_insufficient_inventory_path_reaches_shipping():
    order = _order(quantity=50)
    workflow = build_workflow(order, Inventory(), _processor(1.0))
    for place in [
        "payment_processing",
        "payment_approved",
        "inventory_check",
        "inventory_insufficient",
        "shipping",
    ]:
        workflow.apply([place])
    assert order.status == "shipping"


def test_retry_then_cancel():
    order = _order()
    workflow = build_workflow(order, Inventory(), _processor(0.0))
    workflow.apply(["payment_processing"])
    workflow.apply(["payment_failed"])
    workflow.apply(["payment_processing"])
    workflow.apply(["cancelled"])
    assert order.status == "cancelled"


def test_cannot_deliver_from_pending():
    workflow = build_workflow(_order(), Inventory(), _processor(1.0))
    with pytest.raises(TransitionNotAllowedError):
        workflow.apply(["delivered"])
    assert workflow.current_places == ["pending"]


def test_main_delivers_with_certain_payment(capsys):
    assert main(["--success-rate", "1.0", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "Status: delivered" in out
    assert "Current places: [delivered]" in out
    assert "stateDiagram-v2" in out


def test_main_cancels_when_payment_fails(capsys):
    assert main(["--success-rate", "0.0", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert "Payment failed on retry - cancelling order" in out
    assert "Status:" not in out