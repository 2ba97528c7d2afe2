"""Mini-game API routes -- rock-paper-scissors against the house."""
import random

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from portfolio.domain.game import Choice, Match, MatchOverError

router = APIRouter(prefix="/api/game", tags=["game"])

_match_repo = None
_rng = None


def init_game_routes(match_repo, rng: random.Random | None = None):
    global _match_repo, _rng
    _match_repo = match_repo
    _rng = rng or random.Random()


class PlayRequest(BaseModel):
    choice: Choice


def _get_match_or_404(match_id: str) -> Match:
    match = _match_repo.find_by_id(match_id)
    if not match:
        raise HTTPException(status_code=404, detail="Match not found.")
    return match


@router.post("/start")
def api_start_match():
    match = Match()
    _match_repo.save(match)
    return match.to_dict()


@router.get("/{match_id}")
def api_get_match(match_id: str):
    return _get_match_or_404(match_id).to_dict()


@router.post("/{match_id}/play")
def api_play_round(match_id: str, req: PlayRequest):
    """Play one round. Returns the round result and the updated match."""
    match = _get_match_or_404(match_id)
    with _match_repo.lock:
        try:
            round_result = match.play(req.choice, _rng)
        except MatchOverError:
            raise HTTPException(status_code=409, detail="Match is already over. Start a new one.")
    return {"round": round_result, "match": match.to_dict()}
