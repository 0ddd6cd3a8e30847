from __future__ import annotations

import time
from typing import Callable

from rich.console import Console

from act.game.models import Room

BANNER = r"""
      _/           _//   _/// _//////
     _/ //      _//   _//     _//
    _/  _//    _//            _//
   _//   _//   _//            _//
  _////// _//  _//            _//
 _//       _//  _//   _//     _//
_//         _//   _////       _//
"""


def scene_lines(scene: str) -> list[str]:
    # Split on "\n" only; a trailing "\r" is dropped and so is a final empty line.
    lines = [line[:-1] if line.endswith("\r") else line for line in scene.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def render_room(room: Room) -> str:
    lines = scene_lines(room.scene)
    lines.append("")
    for i, action in enumerate(room.actions):
        lines.append(f"{i}. {action.label}")
        lines.append("")
    lines.append("")
    return "\n".join(lines)


class Presenter:
    """Prints rooms and messages on a rich console."""

    def __init__(self, console: Console | None = None, sleep: Callable[[float], None] = time.sleep):
        self.console = console or Console()
        self._sleep = sleep

    def _print(self, text: str) -> None:
        # Game text is printed verbatim, never as rich markup.
        self.console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)

    def show_room(self, room: Room) -> None:
        self._print(render_room(room))

    def show_message(self, text: str) -> None:
        self._print(text)

    def clear(self) -> None:
        self.console.clear()

    def splash(self, delay: float) -> None:
        self._print("Made with \n")
        self._print(BANNER)
        self._print("Make your own game at github.com/ichy-wayland/act")
        if delay > 0:
            self._sleep(delay)
        self.clear()
