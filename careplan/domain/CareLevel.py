"""CareLevel domain entity: assessed care tier and its monthly unit cap."""


class CareLevel:
    def __init__(self, level: int, max_units: int, name: str = ""):
        self.level = level
        self.max_units = max_units
        self.name = name or f"要介護{level}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, CareLevel):
            return NotImplemented
        return (self.level, self.max_units) == (other.level, other.max_units)

    def __hash__(self) -> int:
        return hash((self.level, self.max_units))

    def __str__(self) -> str:
        return f"{self.name} (level {self.level}) - cap {self.max_units} units"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return CareLevel(int(data["level"]), int(data["max_units"]), data.get("name", ""))

    def to_dict(self):
        return {"level": self.level, "name": self.name, "max_units": self.max_units}
