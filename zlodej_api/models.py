from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field


class PlayerSpec(BaseModel):
    kind: Literal["H", "AI"]
    name: str = ""


class NewGameReq(BaseModel):
    players: List[PlayerSpec] = Field(..., min_length=2, max_length=4)
    handSize: int = Field(6, ge=2, le=20)
    decks: int = Field(2, ge=1, le=4)
    jokersPerDeck: int = Field(2, ge=0, le=4)
    aiTier: Literal[1, 2, 3] = 3
    aiStealProbability: float = Field(0.65, ge=0.0, le=1.0)
    stalemateRounds: int = Field(2, ge=1)
    stalemateCards: int = Field(20, ge=0)
    lang: Literal["en", "cs"] = "en"
    series: bool = False
    firstPlayer: Optional[int] = Field(None, ge=0, le=3)
    seed: Optional[int] = None


class StepReq(BaseModel):
    sessionId: str


class CommandReq(BaseModel):
    sessionId: str
    playerIndex: int = Field(..., ge=0, le=3)
    action: Literal["discard", "take_discard", "play", "steal"]
    cardId: int = Field(..., ge=0)
    victimIndex: Optional[int] = Field(None, ge=0, le=3)
    forceNew: bool = False


class GetStateResp(BaseModel):
    state: Dict[str, Any]


class StateEnvelope(BaseModel):
    sessionId: str
    state: Dict[str, Any]


class CommandResp(BaseModel):
    ok: bool
    code: str
    message: str
    state: Dict[str, Any]
