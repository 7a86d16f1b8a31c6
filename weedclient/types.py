from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Location:
    """Address of a volume server as reported by the master."""

    public_url: str
    url: str

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(public_url=data["publicUrl"], url=data["url"])


class ReplicationValue(Enum):
    # the master allows at most two extra copies per scope
    ONE_REPLICA = "1"
    TWO_REPLICAS = "2"


@dataclass(frozen=True)
class ReplicationType:
    """
    Replica placement requested at assign time.

    Serialized as three digits: other data center, other rack, same rack.
    "100" asks for one extra copy in another data center.
    """

    data_center: Optional[ReplicationValue] = None
    other_rack: Optional[ReplicationValue] = None
    same_rack: Optional[ReplicationValue] = None

    def to_string(self) -> str:
        slots = (self.data_center, self.other_rack, self.same_rack)
        return "".join("0" if slot is None else slot.value for slot in slots)

    def __str__(self) -> str:
        return self.to_string()


class TTLUnit(Enum):
    MINUTE = "m"
    HOUR = "h"
    DAY = "d"
    WEEK = "w"
    MONTH = "M"
    YEAR = "y"


@dataclass(frozen=True)
class TTL:
    """Time to live for a newly assigned file id, e.g. ``TTL(TTLUnit.DAY, 3)``."""

    unit: TTLUnit
    value: int

    def to_string(self) -> str:
        return f"{self.value}{self.unit.value}"

    def __str__(self) -> str:
        return self.to_string()
