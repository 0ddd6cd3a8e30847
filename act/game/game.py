from __future__ import annotations

import logging
import sys
from dataclasses import astuple
from typing import IO

from act.core.audit import append_audit
from act.core.config import ActConfig
from act.core.errors import MissingStartRoom, UnknownRoom
from act.game.engine import apply, blocked_message, has_item, select_action
from act.game.loader import check_references, parse
from act.game.models import Blocked, Effect, Moved, PlayerState, Room, World
from act.game.render import Presenter

logger = logging.getLogger(__name__)


class Game:
    """One running session: a shared world and the player's own state."""

    def __init__(self, world: World, config: ActConfig | None = None):
        self.world = world
        self.config = config or ActConfig()
        self.state = PlayerState(room=self.config.start_room)

    def current_room(self) -> Room:
        room = self.world.rooms.get(self.state.room)
        if room is None:
            raise UnknownRoom(self.state.room)
        return room

    def has_item(self, item_id: str) -> bool:
        return has_item(self.state, item_id)

    def choose(self, index: int) -> Effect | None:
        room = self.current_room()
        if not 0 <= index < len(room.actions):
            return None
        room_id = self.state.room
        effect = apply(room.actions[index], self.state)
        logger.debug("Room %s action %d -> %s", room_id, index, effect)
        self._audit(room_id, index, effect)
        return effect

    def step(self, line: str) -> Effect | None:
        index = select_action(line, len(self.current_room().actions))
        if index is None:
            return None
        return self.choose(index)

    def play(self, presenter: Presenter | None = None, stream: IO[str] | None = None) -> None:
        """Run the game until the input stream is exhausted.

        UnknownRoom propagates if the player ends up in a room the world
        does not have.
        """
        presenter = presenter or Presenter()
        stream = stream or sys.stdin

        if self.config.splash:
            presenter.splash(self.config.splash_delay)

        while True:
            room = self.current_room()
            presenter.show_room(room)

            line = stream.readline()
            if not line:
                logger.debug("Input closed, leaving game")
                return

            index = select_action(line, len(room.actions))
            if index is None:
                continue
            effect = self.choose(index)
            if isinstance(effect, Blocked):
                presenter.show_message(blocked_message(room.actions[index], effect))
            elif isinstance(effect, Moved) and self.config.clear_on_move:
                presenter.clear()

    def _audit(self, room_id: str, index: int, effect: Effect) -> None:
        if not self.config.audit_path:
            return
        append_audit(
            {
                "event": "action",
                "room": room_id,
                "index": index,
                "effect": type(effect).__name__,
                "target": astuple(effect)[0],
            },
            self.config.audit_path,
        )


def load_game(text: str, config: ActConfig | None = None) -> Game:
    return start_game(parse(text), config)


def start_game(world: World, config: ActConfig | None = None) -> Game:
    config = config or ActConfig()
    if config.validate_references:
        check_references(world, config.start_room)
    elif config.start_room not in world:
        raise MissingStartRoom(config.start_room)

    if config.audit_path:
        append_audit(
            {"event": "game_loaded", "rooms": len(world), "start_room": config.start_room},
            config.audit_path,
        )
    return Game(world, config)
