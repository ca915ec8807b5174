from __future__ import annotations

from typing import Dict, List, Tuple
import logging
import random
import uuid

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from zlodej_api.models import (
    NewGameReq,
    StepReq,
    CommandReq,
    GetStateResp,
    StateEnvelope,
    CommandResp,
)

from zlodej.commands import Command, Discard, PlayToScorePile, Steal, TakeDiscard
from zlodej.core import (
    GameConfig,
    GameState,
    SeriesState,
    new_game,
    start_game,
    next_series_game,
    is_series_over,
    play_human_turn,
    run_ai_turns,
    skip_game,
    step as engine_step,
    to_json,
)
from zlodej.types import PlayerKind

logger = logging.getLogger(__name__)

# In-memory session store
SESSIONS: Dict[str, GameState] = {}


def _new_session_id() -> str:
    return uuid.uuid4().hex


def get_state(session_id: str) -> GameState:
    state = SESSIONS.get(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return state


def save_state(session_id: str, state: GameState) -> None:
    SESSIONS[session_id] = state


def _to_command(req: CommandReq) -> Command:
    if req.action == "discard":
        return Discard(req.cardId)
    if req.action == "take_discard":
        return TakeDiscard(req.cardId)
    if req.action == "play":
        return PlayToScorePile(req.cardId, force_new=req.forceNew)
    if req.victimIndex is None:
        raise HTTPException(status_code=422, detail="victimIndex is required to steal")
    return Steal(req.cardId, req.victimIndex)


app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/new-game", response_model=StateEnvelope)
def new_game_endpoint(req: NewGameReq) -> StateEnvelope:
    try:
        players_cfg: List[Tuple[PlayerKind, str]] = [(p.kind, p.name) for p in req.players]
        if req.firstPlayer is not None and req.firstPlayer >= len(players_cfg):
            raise HTTPException(status_code=422, detail="firstPlayer out of range")
        cfg = GameConfig(
            players=players_cfg,
            hand_size=req.handSize,
            decks=req.decks,
            jokers_per_deck=req.jokersPerDeck,
            ai_tier=req.aiTier,
            ai_steal_probability=req.aiStealProbability,
            stalemate_rounds=req.stalemateRounds,
            stalemate_cards=req.stalemateCards,
            lang=req.lang,
        )
        rng = random.Random(req.seed)
        series = SeriesState(num_games=len(players_cfg)) if req.series else None
        state = new_game(cfg, rng, series=series)
        start_game(state, req.firstPlayer)
        sid = _new_session_id()
        save_state(sid, state)
        logger.info("New game %s: %d players, tier %d", sid, len(players_cfg), cfg.ai_tier)
        return StateEnvelope(sessionId=sid, state=to_json(state))
    except HTTPException:
        raise
    except (AssertionError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("new-game failed")
        raise HTTPException(status_code=500, detail=f"new-game failed: {e}")


@app.get("/state/{sessionId}", response_model=GetStateResp)
def get_state_endpoint(sessionId: str) -> GetStateResp:
    state = get_state(sessionId)
    return GetStateResp(state=to_json(state))


@app.post("/step", response_model=GetStateResp)
def step_endpoint(req: StepReq) -> GetStateResp:
    """Play a single AI turn, if an AI is on turn."""
    try:
        state = get_state(req.sessionId)
        engine_step(state)
        save_state(req.sessionId, state)
        return GetStateResp(state=to_json(state))
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("step failed")
        raise HTTPException(status_code=500, detail=f"step failed: {e}")


@app.post("/run-ai", response_model=GetStateResp)
def run_ai_endpoint(req: StepReq) -> GetStateResp:
    """Play AI turns until a human is on turn or the game ends."""
    try:
        state = get_state(req.sessionId)
        run_ai_turns(state)
        save_state(req.sessionId, state)
        return GetStateResp(state=to_json(state))
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("run-ai failed")
        raise HTTPException(status_code=500, detail=f"run-ai failed: {e}")


@app.post("/command", response_model=CommandResp)
def command_endpoint(req: CommandReq) -> CommandResp:
    try:
        state = get_state(req.sessionId)
        command = _to_command(req)
        result = play_human_turn(state, req.playerIndex, command)
        save_state(req.sessionId, state)
        return CommandResp(ok=result.ok, code=result.code, message=result.message, state=to_json(state))
    except HTTPException:
        raise
    except AssertionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("command failed")
        raise HTTPException(status_code=500, detail=f"command failed: {e}")


@app.post("/skip", response_model=GetStateResp)
def skip_endpoint(req: StepReq) -> GetStateResp:
    state = get_state(req.sessionId)
    skip_game(state)
    return GetStateResp(state=to_json(state))


@app.post("/next-game", response_model=GetStateResp)
def next_game_endpoint(req: StepReq) -> GetStateResp:
    state = get_state(req.sessionId)
    if state.series is None:
        raise HTTPException(status_code=400, detail="Not a series session")
    if state.phase != "gameEnd":
        raise HTTPException(status_code=400, detail="Current game is still running")
    if is_series_over(state.series):
        raise HTTPException(status_code=400, detail="Series is over")
    nxt = next_series_game(state)
    save_state(req.sessionId, nxt)
    return GetStateResp(state=to_json(nxt))


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run("zlodej_api.app:app", host="0.0.0.0", port=8000, reload=True)
