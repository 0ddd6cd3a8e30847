from __future__ import annotations

import logging

from act.game.models import Action, Blocked, Effect, ItemAcquired, Move, Moved, PickUp, PlayerState

logger = logging.getLogger(__name__)


def has_item(state: PlayerState, item_id: str) -> bool:
    # An empty id stands for "no requirement".
    return item_id == "" or item_id in state.inventory


def apply(action: Action, state: PlayerState) -> Effect:
    """Apply one action to the player state and report what happened.

    Only the player state is touched. Move destinations are not checked
    against the world here; a bad destination shows up on the next lookup
    of the current room.
    """
    if isinstance(action, PickUp):
        if not has_item(state, action.requirement_id):
            logger.debug("PickUp of %s blocked, missing %s", action.item_id, action.requirement_id)
            return Blocked(action.requirement_id)
        state.inventory.add(action.item_id)
        return ItemAcquired(action.item_id)

    if isinstance(action, Move):
        if not has_item(state, action.requirement_id):
            logger.debug("Move to %s blocked, missing %s", action.destination_room_id, action.requirement_id)
            return Blocked(action.requirement_id)
        state.room = action.destination_room_id
        return Moved(action.destination_room_id)

    raise TypeError(f"not an action: {action!r}")


def select_action(line: str, count: int) -> int | None:
    if not line:
        return None
    ch = line[0]
    if ch not in "0123456789":
        return None
    index = int(ch)
    if index >= count:
        return None
    return index


def blocked_message(action: Action, effect: Blocked) -> str:
    if isinstance(action, Move):
        return f"For opening this room, you need to have a {effect.requirement_id}"
    return f"To take this, you need to have a {effect.requirement_id}"
