"""An order processing workflow: payment, inventory check, shipping, delivery."""

from __future__ import annotations

import argparse
import logging
import random
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Sequence

from wfnet.definition import Definition
from wfnet.errors import WorkflowError
from wfnet.event import Event, EventType
from wfnet.transition import Transition
from wfnet.workflow import Workflow

log = logging.getLogger(__name__)

PLACES = [
    "pending",
    "payment_processing",
    "payment_approved",
    "payment_failed",
    "inventory_check",
    "inventory_insufficient",
    "shipping",
    "delivered",
    "cancelled",
    "refunded",
]

_TRANSITIONS = [
    ("process_payment", ["pending"], ["payment_processing"]),
    ("payment_success", ["payment_processing"], ["payment_approved"]),
    ("payment_failure", ["payment_processing"], ["payment_failed"]),
    ("retry_payment", ["payment_failed"], ["payment_processing"]),
    ("check_inventory", ["payment_approved"], ["inventory_check"]),
    ("inventory_available", ["inventory_check"], ["shipping"]),
    ("inventory_insufficient", ["inventory_check"], ["inventory_insufficient"]),
    ("restock_and_ship", ["inventory_insufficient"], ["shipping"]),
    ("mark_delivered", ["shipping"], ["delivered"]),
    ("cancel_pending", ["pending"], ["cancelled"]),
    ("cancel_payment_processing", ["payment_processing"], ["cancelled"]),
    ("cancel_payment_approved", ["payment_approved"], ["cancelled"]),
    ("refund_order", ["delivered"], ["refunded"]),
]


@dataclass(frozen=True)
class OrderItem:
    """One product line of an order."""

    product_id: str
    quantity: int
    price: float


@dataclass
class Order:
    """A customer order moving through the workflow."""

    id: str
    customer_id: str
    amount: float
    items: list[OrderItem] = field(default_factory=list)
    status: str = "pending"
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


def _default_stock() -> dict[str, int]:
    return {"prod-001": 5, "prod-002": 3}


@dataclass
class Inventory:
    """Stock levels by product id."""

    items: dict[str, int] = field(default_factory=_default_stock)

    def has_sufficient_stock(self, items: Iterable[OrderItem]) -> bool:
        """Whether every item's quantity is available."""
        return all(self.items.get(item.product_id, 0) >= item.quantity for item in items)

    def restock(self, items: Iterable[OrderItem]) -> None:
        """Add each item's quantity plus two spare units to the stock."""
        for item in items:
            self.items[item.product_id] = self.items.get(item.product_id, 0) + item.quantity + 2


@dataclass
class PaymentProcessor:
    """A simulated payment gateway that succeeds with a given probability."""

    success_rate: float
    delay: float = 0.1
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def process_payment(self, amount: float) -> bool:
        """Simulate charging ``amount``; True when the payment goes through."""
        if self.delay > 0:
            time.sleep(self.delay)
        return self.rng.random() < self.success_rate


def _handle_payment_processing(workflow: Workflow) -> None:
    amount = workflow.context.get("order_amount")
    if isinstance(amount, float):
        log.info("Processing payment for amount: $%.2f", amount)


def _handle_inventory_check(workflow: Workflow) -> None:
    order = workflow.context.get("order")
    if isinstance(order, Order):
        log.info("Checking inventory for %d items", len(order.items))


def _handle_delivery(workflow: Workflow) -> None:
    order = workflow.context.get("order")
    if isinstance(order, Order):
        log.info("Delivering order %s to customer %s", order.id, order.customer_id)


def build_workflow(
    order: Order, inventory: Inventory, processor: PaymentProcessor
) -> Workflow:
    """A workflow named after ``order``, in ``pending``, with its listeners attached."""
    definition = Definition(
        PLACES, [Transition(name, src, dst) for name, src, dst in _TRANSITIONS]
    )
    workflow = Workflow(order.id, definition, "pending")
    workflow.context["order"] = order
    workflow.context["order_amount"] = order.amount
    workflow.context["customer_id"] = order.customer_id

    handlers = {
        "process_payment": _handle_payment_processing,
        "check_inventory": _handle_inventory_check,
        "mark_delivered": _handle_delivery,
    }

    def before(event: Event) -> None:
        log.info("Processing transition: %s", event.transition.name)
        handler = handlers.get(event.transition.name)
        if handler is not None:
            handler(workflow)

    def after(event: Event) -> None:
        log.info("Completed transition: %s", event.transition.name)
        current = workflow.context.get("order")
        if isinstance(current, Order):
            current.status = workflow.current_places[0]
            current.updated_at = datetime.now()

    workflow.add_event_listener(EventType.BEFORE_TRANSITION, before)
    workflow.add_event_listener(EventType.AFTER_TRANSITION, after)
    return workflow


def _sample_order() -> Order:
    return Order(
        id="order-123",
        customer_id="cust-456",
        amount=150.0,
        items=[
            OrderItem(product_id="prod-001", quantity=2, price=50.0),
            OrderItem(product_id="prod-002", quantity=1, price=50.0),
        ],
    )


def _step(workflow: Workflow, place: str, failure: str) -> bool:
    try:
        workflow.apply([place])
    except (WorkflowError, ValueError) as exc:
        log.error("%s: %s", failure, exc)
        return False
    return True


def _run(
    workflow: Workflow, order: Order, inventory: Inventory, processor: PaymentProcessor
) -> bool:
    print("\n1. Processing payment...")
    if not _step(workflow, "payment_processing", "Payment processing failed"):
        return False

    if processor.process_payment(order.amount):
        print("Payment approved")
        if not _step(workflow, "payment_approved", "Payment approval failed"):
            return False
    else:
        print("Payment failed")
        if not _step(workflow, "payment_failed", "Payment failure handling failed"):
            return False
        print("Retrying payment...")
        if not _step(workflow, "payment_processing", "Payment retry failed"):
            return False
        if processor.process_payment(order.amount):
            print("Payment approved on retry")
            if not _step(workflow, "payment_approved", "Payment approval failed"):
                return False
        else:
            print("Payment failed on retry - cancelling order")
            _step(workflow, "cancelled", "Order cancellation failed")
            return False

    print("\n2. Checking inventory...")
    if not _step(workflow, "inventory_check", "Inventory check failed"):
        return False

    if inventory.has_sufficient_stock(order.items):
        print("Inventory available")
        if not _step(workflow, "shipping", "Shipping transition failed"):
            return False
    else:
        print("Insufficient inventory")
        if not _step(
            workflow, "inventory_insufficient", "Inventory insufficient handling failed"
        ):
            return False
        print("Restocking inventory...")
        inventory.restock(order.items)
        if not _step(workflow, "shipping", "Shipping after restock failed"):
            return False

    print("\n3. Marking as delivered...")
    return _step(workflow, "delivered", "Delivery marking failed")


def main(argv: Sequence[str] | None = None) -> int:
    """Process a sample order end to end and print its final state and diagram."""
    parser = argparse.ArgumentParser(description="Run the order processing workflow.")
    parser.add_argument("--success-rate", type=float, default=0.8)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    inventory = Inventory()
    processor = PaymentProcessor(args.success_rate, rng=random.Random(args.seed))
    order = _sample_order()
    workflow = build_workflow(order, inventory, processor)

    print("Starting Order Processing Workflow")
    print("=====================================")

    if not _run(workflow, order, inventory, processor):
        return 0

    print("\nFinal Order Status:")
    print(f"Order ID: {order.id}")
    print(f"Customer: {order.customer_id}")
    print(f"Amount: ${order.amount:.2f}")
    print(f"Status: {order.status}")
    print(f"Current places: [{' '.join(workflow.current_places)}]")

    print("\nWorkflow Diagram:")
    print("===================")
    print(workflow.diagram())

    print("\nTransition History:")
    print("=====================")
    print("Note: Transition history tracking is available in the website workflow example")
    print(
        "This demonstrates the workflow state progression through the order processing steps."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())