"""
Work registry module.
"""

from workpoll.registry.work_registry import WorkRegistry

__all__ = ["WorkRegistry"]
