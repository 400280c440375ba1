"""ServiceAssignment: one scheduled instance of a service definition inside a slot."""
from typing import Optional
from uuid import uuid4


class ServiceAssignment:
    def __init__(self, definition_id: str, instance_id: Optional[str] = None):
        self.definition_id = definition_id
        self.instance_id = instance_id or uuid4().hex

    def __eq__(self, other) -> bool:
        if not isinstance(other, ServiceAssignment):
            return NotImplemented
        return (self.instance_id, self.definition_id) == (other.instance_id, other.definition_id)

    def __hash__(self) -> int:
        return hash((self.instance_id, self.definition_id))

    def __str__(self) -> str:
        return f"{self.definition_id}#{self.instance_id}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        return ServiceAssignment(str(data["definition_id"]), str(data["instance_id"]))

    def to_dict(self):
        return {"definition_id": self.definition_id, "instance_id": self.instance_id}
