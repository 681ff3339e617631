"""
Shared FastAPI dependencies.
"""
from fastapi import Request

from chefgpt.services.chef_service import ChefService


def get_chef_service(request: Request) -> ChefService:
    """Return the ChefService wired onto the application at startup."""
    return request.app.state.chef_service
