"""
FastAPI dependencies shared by the routes.
"""

from typing import Annotated

from fastapi import Depends, Request

from workpoll.registry import WorkRegistry


def get_registry(request: Request) -> WorkRegistry:
    """Return the registry owned by the running application."""
    return request.app.state.registry


Registry = Annotated[WorkRegistry, Depends(get_registry)]
