from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Union


@dataclass(frozen=True)
class PickUp:
    label: str
    item_id: str
    requirement_id: str = ""


@dataclass(frozen=True)
class Move:
    label: str
    destination_room_id: str
    requirement_id: str = ""


Action = Union[PickUp, Move]


@dataclass(frozen=True)
class Room:
    scene: str
    actions: tuple[Action, ...] = ()


@dataclass(frozen=True, eq=False)
class World:
    rooms: Mapping[str, Room]

    def __post_init__(self) -> None:
        object.__setattr__(self, "rooms", MappingProxyType(dict(self.rooms)))

    def __contains__(self, room_id: object) -> bool:
        return room_id in self.rooms

    def __len__(self) -> int:
        return len(self.rooms)


@dataclass
class PlayerState:
    room: str
    inventory: set[str] = field(default_factory=set)


@dataclass(frozen=True)
class ItemAcquired:
    item_id: str


@dataclass(frozen=True)
class Moved:
    room_id: str


@dataclass(frozen=True)
class Blocked:
    requirement_id: str


Effect = Union[ItemAcquired, Moved, Blocked]
