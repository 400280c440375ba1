from typing import Optional

from fastapi import APIRouter, Query

from careplan.domain.Catalog import DEFAULT_CATALOG

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/care-levels")
def list_care_levels():
    """Return the five care levels with their monthly unit caps."""
    return [c.to_dict() for c in DEFAULT_CATALOG.all_care_levels()]


@router.get("/care-levels/{level}")
def get_care_level(level: int):
    return DEFAULT_CATALOG.care_level_by_rank(level).to_dict()


@router.get("/services")
def list_services(monthly_only: Optional[bool] = Query(default=None)):
    """Return service definitions; monthly_only=true/false filters by recurrence kind."""
    return [s.to_dict() for s in DEFAULT_CATALOG.all_service_definitions(monthly_only)]


@router.get("/services/{definition_id}")
def get_service(definition_id: str):
    return DEFAULT_CATALOG.service_definition(definition_id).to_dict()
