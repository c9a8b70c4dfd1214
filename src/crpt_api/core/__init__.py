"""Core layer: domain, ports, services and use cases (no I/O)."""

from .domain.models import Document, Product, RateWindow

__all__ = ["Document", "Product", "RateWindow"]
