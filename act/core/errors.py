from __future__ import annotations


class ActError(Exception):
    """Base exception for the Act engine."""


class LoadError(ActError):
    """Raised when a game cannot be started from the given description."""


class ParseError(LoadError):
    """Raised when a world description cannot be decoded."""


class MalformedDocument(ParseError):
    """Missing keys, wrong types or undecodable text."""


class UnknownActionVariant(ParseError):
    def __init__(self, variant: object, room: str | None = None) -> None:
        self.variant = variant
        self.room = room
        where = f" in room '{room}'" if room is not None else ""
        super().__init__(f"unknown action variant {variant!r}{where}")


class MalformedAction(ParseError):
    def __init__(self, field_count: int, room: str | None = None) -> None:
        self.field_count = field_count
        self.room = room
        where = f" in room '{room}'" if room is not None else ""
        super().__init__(f"action needs exactly 3 fields, got {field_count}{where}")


class MissingStartRoom(LoadError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"start room '{room_id}' does not exist")


class DanglingReference(LoadError):
    """Raised by the eager reference check for Move targets with no room."""

    def __init__(self, references: list[tuple[str, str]]) -> None:
        self.references = references
        listed = ", ".join(f"{src} -> {dst}" for src, dst in references)
        super().__init__(f"moves point to unknown rooms: {listed}")


class UnobtainableRequirement(LoadError):
    """Raised by the eager reference check for requirements no PickUp grants."""

    def __init__(self, references: list[tuple[str, str]]) -> None:
        self.references = references
        listed = ", ".join(f"{item} (in {room})" for room, item in references)
        super().__init__(f"required items are never granted: {listed}")


class ConfigError(ActError):
    """Raised when the config file cannot be read or has bad values."""


class UnknownRoom(ActError):
    def __init__(self, room_id: str) -> None:
        self.room_id = room_id
        super().__init__(f"unknown room '{room_id}'")
