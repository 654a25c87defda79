"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.firebase import FirebaseIdentityProvider
from app.core.redis_client import CacheManager, get_redis_client
from app.database import get_db


def get_cache_manager() -> CacheManager:
    """Cache manager over the process-wide Redis client."""
    return CacheManager(get_redis_client())


def get_identity_provider(request: Request) -> FirebaseIdentityProvider:
    """
    Identity provider built during application startup.

    Raises:
        RuntimeError: If the application lifespan has not run
    """
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        raise RuntimeError("Identity provider not configured")
    return provider


# Type aliases for dependency injection
DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
CacheManagerDep = Annotated[CacheManager, Depends(get_cache_manager)]
IdentityProviderDep = Annotated[FirebaseIdentityProvider, Depends(get_identity_provider)]
