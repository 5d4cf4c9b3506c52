"""
Health check API endpoints
"""

from fastapi import APIRouter, Depends

from idservice.application.interfaces import IComponentSearch
from idservice.core.monitoring import health_checker, SystemHealth
from idservice.presentation.api.v1.dependencies.identifiers import get_store_search

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
def health_check(search: IComponentSearch = Depends(get_store_search)):
    """
    Health check endpoint that returns process metrics and store reachability
    """
    return health_checker.get_system_health(search)


@router.get("/")
async def root():
    """
    Root endpoint
    """
    return {"message": "Component Identifier API is running", "status": "healthy"}
