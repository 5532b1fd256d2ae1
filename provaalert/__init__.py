"""Alertmanager webhook receiver, Instance resource model, in-memory store and reconciler."""

__version__ = "0.1.0"
__all__ = ["controller", "server", "types"]