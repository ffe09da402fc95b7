"""A document approval workflow with parallel technical and legal reviews."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

from wfnet.definition import Definition
from wfnet.errors import WorkflowError
from wfnet.event import Event, EventType, GuardEvent
from wfnet.transition import Transition
from wfnet.workflow import Workflow

CONTEXT_KEY = "document_context"

PLACES = [
    "draft",
    "pending_technical_review",
    "technical_approved",
    "pending_legal_review",
    "legal_approved",
    "pending_manager_approval",
    "pending_director_approval",
    "approved",
    "rejected",
    "archived",
]

_TRANSITIONS = [
    ("submit_for_review", ["draft"], ["pending_technical_review", "pending_legal_review"]),
    ("technical_approve", ["pending_technical_review"], ["technical_approved"]),
    ("technical_reject", ["pending_technical_review"], ["rejected"]),
    ("legal_approve", ["pending_legal_review"], ["legal_approved"]),
    ("legal_reject", ["pending_legal_review"], ["rejected"]),
    (
        "pending_manager_approve",
        ["technical_approved", "legal_approved"],
        ["pending_manager_approval"],
    ),
    ("manager_approve", ["pending_manager_approval"], ["pending_director_approval"]),
    ("manager_reject", ["pending_manager_approval"], ["rejected"]),
    ("director_approve", ["pending_director_approval"], ["approved"]),
    ("director_reject", ["pending_director_approval"], ["rejected"]),
    ("archive_approved", ["approved"], ["archived"]),
    ("archive_rejected", ["rejected"], ["archived"]),
    ("reopen_approved", ["approved"], ["draft"]),
    ("reopen_rejected", ["rejected"], ["draft"]),
]

_FINAL_STATES = {"approved", "rejected", "archived"}


@dataclass
class Document:
    """A document going through the approval process."""

    id: str
    title: str
    content: str
    author: str
    created_at: datetime = field(default_factory=datetime.now)
    approvals: dict[str, bool] = field(default_factory=dict)
    rejections: dict[str, bool] = field(default_factory=dict)
    comments: dict[str, list[str]] = field(default_factory=dict)
    final_status: str = ""


@dataclass
class DocumentContext:
    """The document together with who is acting on it."""

    document: Document
    user: str
    role: str


def _document_context(event: Event) -> DocumentContext:
    value = event.get_context(CONTEXT_KEY)
    if value is None:
        raise WorkflowError("missing document context")
    if not isinstance(value, DocumentContext):
        raise WorkflowError("invalid document context type")
    return value


def _guard(event: GuardEvent) -> None:
    ctx = _document_context(event)
    if "pending_manager_approval" in event.from_places:
        approvals = ctx.document.approvals
        if not (
            approvals.get("technical_reviewer", False)
            and approvals.get("legal_reviewer", False)
        ):
            event.blocking = True
            raise WorkflowError(
                "both technical and legal approvals are required before manager decision"
            )


def _log_transition(event: Event) -> None:
    ctx = _document_context(event)
    print(
        f"Document {ctx.document.id}: [{' '.join(event.from_places)}] -> "
        f"[{' '.join(event.to_places)}] by {ctx.user} ({ctx.role})"
    )


def _after_transition(event: Event) -> None:
    ctx = _document_context(event)
    for state in event.to_places:
        if state in _FINAL_STATES:
            ctx.document.final_status = state

    workflow = event.workflow
    if workflow is None:
        return
    current = workflow.current_places
    if "technical_approved" in current and "legal_approved" in current:
        ctx.user = "system"
        ctx.role = "system"
        try:
            workflow.apply(["pending_manager_approval"])
        except (WorkflowError, ValueError) as exc:
            raise WorkflowError(
                f"failed to auto-trigger pending_manager_approve: {exc}"
            ) from exc


def build_workflow() -> Workflow:
    """The ``document_approval`` workflow in ``draft``, with its listeners attached."""
    definition = Definition(
        PLACES, [Transition(name, src, dst) for name, src, dst in _TRANSITIONS]
    )
    workflow = Workflow("document_approval", definition, "draft")
    workflow.add_guard_event_listener(_guard)
    workflow.add_event_listener(EventType.BEFORE_TRANSITION, _log_transition)
    workflow.add_event_listener(EventType.AFTER_TRANSITION, _after_transition)
    return workflow


def simulate_approval_process(workflow: Workflow, document: Document) -> None:
    """Take ``document`` from submission through every approval to the archive."""
    ctx = DocumentContext(document=document, user=document.author, role="author")
    workflow.context[CONTEXT_KEY] = ctx
    workflow.apply(["pending_technical_review", "pending_legal_review"])

    ctx.user, ctx.role = "tech_reviewer", "technical_reviewer"
    document.approvals["technical_reviewer"] = True
    workflow.apply(["technical_approved"])

    ctx.user, ctx.role = "legal_reviewer", "legal_reviewer"
    document.approvals["legal_reviewer"] = True
    workflow.apply(["legal_approved"])

    ctx.user, ctx.role = "manager", "manager"
    workflow.apply(["pending_director_approval"])

    ctx.user, ctx.role = "director", "director"
    workflow.apply(["approved"])

    ctx.user, ctx.role = "admin", "administrator"
    workflow.apply(["archived"])


def main(argv: Sequence[str] | None = None) -> int:
    """Run a sample document through the process and print the diagram."""
    workflow = build_workflow()
    document = Document(
        id="DOC-001",
        title="Technical Specification",
        content="This is a sample technical specification document.",
        author="John Doe",
    )
    try:
        simulate_approval_process(workflow, document)
    except (WorkflowError, ValueError) as exc:
        print("error:", exc)

    print("\nWorkflow Diagram:")
    print(workflow.diagram())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())