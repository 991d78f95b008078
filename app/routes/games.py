"""
Module routes/games.py
Rôle:
- Création d'une partie, reveal joueur par joueur, solution finale.

Intégrations:
- FACTORY: validation + tirages + enregistrement.
- REVEAL / SOLUTION: lectures (et suivi des reveals) sur le registre.

Erreurs:
- Les services lèvent des `GameError` ; le mapping `{"error": ...}` est fait
  par les handlers de `app.main` (404 "Game not found" pour une partie expirée).
"""
from fastapi import APIRouter, Path

from app.models.game import (
    CreateGamePayload,
    CreateGameResponse,
    RevealPayload,
    RevealResponse,
    SolutionResponse,
)
from app.services.game_factory import FACTORY
from app.services.reveal import REVEAL, SOLUTION

router = APIRouter(prefix="/games", tags=["games"])


@router.post("", response_model=CreateGameResponse)
def create_game(payload: CreateGamePayload):
    """Crée une partie et renvoie son identifiant opaque."""
    game = FACTORY.create(
        category_ids=payload.category_ids,
        num_players=payload.num_players,
        num_imposters=payload.num_imposters,
        hints_enabled=payload.hints_enabled,
        custom_categories=payload.custom_categories or [],
    )
    return CreateGameResponse(game_id=game.game_id, num_players=game.num_players)


@router.post("/{game_id}/reveal", response_model=RevealResponse, response_model_exclude_none=True)
def reveal_player(payload: RevealPayload, game_id: str = Path(..., description="Identifiant de partie")):
    """
    Rôle privé d'un joueur :
    - player   → {role, word}
    - imposter → {role} (+ hint si indices activés et définis pour le mot)
    """
    result = REVEAL.reveal(game_id, payload.player_number)
    return RevealResponse(role=result.role, word=result.word, hint=result.hint)


@router.get("/{game_id}/solution", response_model=SolutionResponse)
def get_solution(game_id: str = Path(..., description="Identifiant de partie")):
    """Mot secret + places des imposteurs (triées)."""
    solution = SOLUTION.solution(game_id)
    return SolutionResponse(word=solution.word, imposters=solution.imposters)
