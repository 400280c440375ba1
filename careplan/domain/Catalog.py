"""Catalog: fixed reference data (care levels and service definitions). Lookup only."""
from typing import Dict, Iterable, List, Optional

from careplan.domain.CareLevel import CareLevel
from careplan.domain.Errors import NotFound
from careplan.domain.ServiceDefinition import ServiceDefinition
from careplan.utilities.config import DEFAULT_LEVEL
from careplan.utilities.constants import CARE_LEVELS, SERVICE_DEFINITIONS, DEFAULT_CARE_LEVEL


class Catalog:
    def __init__(self, care_levels: Iterable[CareLevel], services: Iterable[ServiceDefinition],
                 default_level: int = DEFAULT_CARE_LEVEL):
        self._levels: Dict[int, CareLevel] = {c.level: c for c in care_levels}
        self._services: Dict[str, ServiceDefinition] = {}
        for service in services:
            if service.id in self._services:
                raise ValueError(f"Duplicate service id in catalog: {service.id}")
            self._services[service.id] = service
        if default_level not in self._levels:
            raise ValueError(f"Default care level {default_level} is not in the catalog")
        self._default_level = default_level

    @classmethod
    def from_dicts(cls, care_levels: List[dict], services: List[dict],
                   default_level: int = DEFAULT_CARE_LEVEL) -> "Catalog":
        return cls([CareLevel.from_dict(c) for c in care_levels],
                   [ServiceDefinition.from_dict(s) for s in services],
                   default_level)

    def care_level_by_rank(self, n: int) -> CareLevel:
        try:
            return self._levels[n]
        except KeyError:
            raise NotFound(f"Care level {n} not found") from None

    def default_care_level(self) -> CareLevel:
        return self._levels[self._default_level]

    def all_care_levels(self) -> List[CareLevel]:
        return [self._levels[k] for k in sorted(self._levels)]

    def service_definition(self, id: str) -> ServiceDefinition:
        try:
            return self._services[id]
        except KeyError:
            raise NotFound(f"Service definition '{id}' not found") from None

    def has_service(self, id: str) -> bool:
        return id in self._services

    def all_service_definitions(self, monthly_only: Optional[bool] = None) -> List[ServiceDefinition]:
        '''
        Returns service definitions in catalog order.

        monthly_only=True keeps only monthly-flat services, False only
        per-occurrence ones, None keeps everything.
        '''
        services = list(self._services.values())
        if monthly_only is None:
            return services
        return [s for s in services if s.is_monthly == monthly_only]


DEFAULT_CATALOG = Catalog.from_dicts(CARE_LEVELS, SERVICE_DEFINITIONS, DEFAULT_LEVEL)
