from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Discard:
    card_id: int


@dataclass(frozen=True)
class TakeDiscard:
    card_id: int


@dataclass(frozen=True)
class PlayToScorePile:
    card_id: int
    force_new: bool = False


@dataclass(frozen=True)
class Steal:
    card_id: int
    victim_idx: int


Command = Union[Discard, TakeDiscard, PlayToScorePile, Steal]


@dataclass
class ActionResult:
    ok: bool
    code: str
    message: str

    def __bool__(self) -> bool:
        return self.ok


def describe(cmd: Command) -> str:
    if isinstance(cmd, Discard):
        return f"discard #{cmd.card_id}"
    if isinstance(cmd, TakeDiscard):
        return f"take_discard #{cmd.card_id}"
    if isinstance(cmd, PlayToScorePile):
        return f"play #{cmd.card_id}" + (" (new)" if cmd.force_new else "")
    if isinstance(cmd, Steal):
        return f"steal #{cmd.card_id} from p{cmd.victim_idx}"
    return f"unknown {cmd!r}"
