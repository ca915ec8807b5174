from __future__ import annotations

from typing import List, Optional
import asyncio
import logging
import random

from .commands import ActionResult, Command, describe
from .core import GameState, current_player, play_human_turn, step
from .messages import msg

logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns one GameState and serializes every change to it.

    Human commands go through ``submit``. AI turns run in a single asyncio
    task created by ``schedule_ai``; while that task is alive, ``submit``
    refuses commands so nothing interleaves with a pending AI decision.
    """

    def __init__(self, state: GameState, ai_delay: float = 0.0, rng: Optional[random.Random] = None) -> None:
        self.state = state
        self.ai_delay = ai_delay
        self.rng = rng
        self._ai_task: Optional["asyncio.Task[List[ActionResult]]"] = None

    @property
    def busy(self) -> bool:
        return self._ai_task is not None and not self._ai_task.done()

    def ai_on_turn(self) -> bool:
        return self.state.phase == "playing" and not current_player(self.state).is_human

    def submit(self, player_idx: int, command: Command) -> ActionResult:
        if self.busy:
            return ActionResult(False, "ai_thinking", msg(self.state.cfg.lang, "ai_thinking"))
        result = play_human_turn(self.state, player_idx, command)
        logger.debug("p%d %s -> %s", player_idx, describe(command), result.code)
        return result

    async def drive_ai(self) -> List[ActionResult]:
        results: List[ActionResult] = []
        while self.ai_on_turn():
            if self.ai_delay > 0:
                await asyncio.sleep(self.ai_delay)
            res = step(self.state, self.rng)
            if res is None:
                break
            logger.info("AI turn: %s", res.message)
            results.append(res)
        if self.state.phase == "gameEnd" and self.state.end_info is not None:
            logger.info("Game ended: %s %s", self.state.end_info.reason, self.state.end_info.scores)
        return results

    def schedule_ai(self) -> Optional["asyncio.Task[List[ActionResult]]"]:
        """Start the AI task when an AI is on turn; must be called from a running event loop."""
        if self.busy:
            return self._ai_task
        if not self.ai_on_turn():
            return None
        self._ai_task = asyncio.get_running_loop().create_task(self.drive_ai())
        return self._ai_task

    def cancel_ai(self) -> None:
        if self.busy:
            assert self._ai_task is not None
            self._ai_task.cancel()
            logger.info("AI turn cancelled")
        self._ai_task = None
