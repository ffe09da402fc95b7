"""Runnable example workflows: a simple flow, document approval and order processing."""

__all__ = ["document_approval", "order_processing", "simple_flow"]