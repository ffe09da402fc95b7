"""Storage back ends for workflow state."""

__all__ = ["sqlite"]