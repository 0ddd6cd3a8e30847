from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from act.core.errors import (
    DanglingReference,
    MalformedAction,
    MalformedDocument,
    MissingStartRoom,
    UnknownActionVariant,
    UnobtainableRequirement,
)
from act.game.models import Action, Move, PickUp, Room, World

logger = logging.getLogger(__name__)

ACTION_VARIANTS = {"PickUp": PickUp, "Move": Move}
YAML_SUFFIXES = {".yaml", ".yml"}


def _require(obj: dict[str, Any], key: str, kind: type, where: str) -> Any:
    if key not in obj:
        raise MalformedDocument(f"missing key '{key}' in {where}")
    value = obj[key]
    if not isinstance(value, kind):
        raise MalformedDocument(f"'{key}' in {where} must be {kind.__name__}, got {type(value).__name__}")
    return value


def _build_action(raw: Any, room_name: str) -> Action:
    where = f"action of room '{room_name}'"
    if not isinstance(raw, dict):
        raise MalformedDocument(f"{where} must be an object")
    variant = _require(raw, "variant", str, where)
    fields = _require(raw, "fields", list, where)
    if any(not isinstance(f, str) for f in fields):
        raise MalformedDocument(f"fields of {where} must be strings")

    cls = ACTION_VARIANTS.get(variant)
    if cls is None:
        raise UnknownActionVariant(variant, room=room_name)
    if len(fields) != 3:
        raise MalformedAction(len(fields), room=room_name)

    label, target, requirement = fields
    return cls(label, target, requirement)


def build_world(data: Any) -> World:
    """Turn a decoded document into a World.

    Room order in the document does not matter, but the action order inside
    each room is kept as-is since it is the index the player selects.
    A repeated room name replaces the earlier room.
    """
    if not isinstance(data, dict):
        raise MalformedDocument("document must be an object with a 'rooms' list")
    rooms_raw = _require(data, "rooms", list, "document")

    rooms: dict[str, Room] = {}
    for i, room in enumerate(rooms_raw):
        where = f"room #{i}"
        if not isinstance(room, dict):
            raise MalformedDocument(f"{where} must be an object")
        name = _require(room, "name", str, where)
        scene = _require(room, "scene", str, f"room '{name}'")
        actions_raw = _require(room, "actions", list, f"room '{name}'")

        if name in rooms:
            logger.warning("Room '%s' defined more than once; keeping the last one", name)
        rooms[name] = Room(
            scene=scene,
            actions=tuple(_build_action(a, name) for a in actions_raw),
        )

    logger.debug("Parsed world with %d rooms", len(rooms))
    return World(rooms=rooms)


def parse(raw_text: str) -> World:
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise MalformedDocument(f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedDocument("invalid JSON: nested too deeply") from e
    return build_world(data)


def parse_yaml(raw_text: str) -> World:
    try:
        data = yaml.safe_load(raw_text)
    except yaml.YAMLError as e:
        raise MalformedDocument(f"invalid YAML: {e}") from e
    except RecursionError as e:
        raise MalformedDocument("invalid YAML: nested too deeply") from e
    return build_world(data)


def load_world_file(path: str | Path) -> World:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Game file not found: {p}")
    try:
        text = p.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocument(f"{p} is not UTF-8 text: {e}") from e
    if p.suffix.lower() in YAML_SUFFIXES:
        return parse_yaml(text)
    return parse(text)


def check_references(world: World, start_room: str) -> None:
    """Eagerly verify the start room, every Move destination and every requirement.

    A requirement counts as satisfiable when some PickUp in the world grants
    that item.
    """
    if start_room not in world:
        raise MissingStartRoom(start_room)

    granted = {
        action.item_id
        for room in world.rooms.values()
        for action in room.actions
        if isinstance(action, PickUp)
    }

    dangling: list[tuple[str, str]] = []
    unobtainable: list[tuple[str, str]] = []
    for room_id, room in world.rooms.items():
        for action in room.actions:
            if isinstance(action, Move) and action.destination_room_id not in world:
                dangling.append((room_id, action.destination_room_id))
            if action.requirement_id and action.requirement_id not in granted:
                unobtainable.append((room_id, action.requirement_id))
    if dangling:
        raise DanglingReference(dangling)
    if unobtainable:
        raise UnobtainableRequirement(unobtainable)
