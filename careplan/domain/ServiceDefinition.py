"""ServiceDefinition domain entity: a care service, its unit cost and recurrence kind."""
from careplan.utilities.constants import PER_OCCURRENCE, MONTHLY_FLAT, RECURRENCE_KINDS


class ServiceDefinition:
    def __init__(self, id: str, units_per_occurrence: int, recurrence: str = PER_OCCURRENCE,
                 name: str = "", category: str = "", icon: str = ""):
        if recurrence not in RECURRENCE_KINDS:
            raise ValueError(f"Unknown recurrence kind: {recurrence}")
        self.id = id
        self.units_per_occurrence = units_per_occurrence
        self.recurrence = recurrence
        self.name = name or id
        self.category = category
        self.icon = icon

    @property
    def is_monthly(self) -> bool:
        return self.recurrence == MONTHLY_FLAT

    def __eq__(self, other) -> bool:
        if not isinstance(other, ServiceDefinition):
            return NotImplemented
        return (self.id, self.units_per_occurrence, self.recurrence) == \
            (other.id, other.units_per_occurrence, other.recurrence)

    def __hash__(self) -> int:
        return hash((self.id, self.units_per_occurrence, self.recurrence))

    def __str__(self) -> str:
        per = "/month" if self.is_monthly else "/visit"
        return f"{self.name} [{self.id}] - {self.units_per_occurrence} units {per}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a ServiceDefinition from a dictionary. Ignores unknown keys.'''
        allowed = {"id", "units_per_occurrence", "recurrence", "name", "category", "icon"}
        return ServiceDefinition(**{k: v for k, v in dict(data).items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "units_per_occurrence": self.units_per_occurrence,
            "recurrence": self.recurrence,
            "monthly": self.is_monthly,
            "category": self.category,
            "icon": self.icon,
        }
