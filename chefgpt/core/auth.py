"""
Internal API authentication dependency.

Generation endpoints are only meant to be called by the ChefGPT web
backend, which owns end-user sessions. The backend proves itself with a
shared secret:

  - Backend sends header: X-Internal-Secret: <INTERNAL_API_SECRET>
  - This service checks it matches the env var
  - Returns 403 if missing or wrong, 503 if the service has no secret set
"""
import os
from fastapi import Header, HTTPException
from typing import Annotated


SECRET = os.getenv("INTERNAL_API_SECRET", "")


def verify_internal_secret(x_internal_secret: Annotated[str, Header()] = "") -> None:
    """FastAPI dependency: validates the shared internal secret header."""
    if not SECRET:
        # Without a configured secret every request is refused
        raise HTTPException(
            status_code=503,
            detail="Service not configured (INTERNAL_API_SECRET not set)"
        )
    if x_internal_secret != SECRET:
        raise HTTPException(
            status_code=403,
            detail="Forbidden: invalid or missing internal secret"
        )
