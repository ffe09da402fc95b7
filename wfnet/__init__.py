"""Petri-net style workflows with guards, events, persistence and diagrams."""

__version__ = "0.1.0"

__all__ = [
    "definition",
    "errors",
    "event",
    "examples",
    "manager",
    "marking",
    "registry",
    "storage",
    "transition",
    "workflow",
]