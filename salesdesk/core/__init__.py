"""Core domain layer - entities, services, interfaces, and exceptions."""

from salesdesk.core import entities, exceptions, interfaces, services

__all__ = ["entities", "services", "interfaces", "exceptions"]
