"""
Service: reveal.py
Rôle:
- RevealController : rôle/mot/indice d'un joueur, idempotent (tout est dérivé de
  l'état figé de la partie, aucun tirage au moment du reveal).
- SolutionDiscloser : mot secret + liste triée des imposteurs.

Ordre des reveals:
- Aucun ordre imposé côté serveur (l'écran "passe le téléphone" est géré par le client).
- La solution est disponible dès que la partie existe.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from .errors import GameNotFound, InvalidPlayer
from .game import Game
from .game_registry import REGISTRY, GameRegistry

logger = logging.getLogger(__name__)

ROLE_PLAYER = "player"
ROLE_IMPOSTER = "imposter"


@dataclass(frozen=True)
class RevealResult:
    role: str
    word: Optional[str] = None
    hint: Optional[str] = None


@dataclass(frozen=True)
class Solution:
    word: str
    imposters: List[int]


def role_view(game: Game, player_number: int) -> RevealResult:
    """Vue privée d'un joueur : les imposteurs n'ont jamais le mot, les joueurs jamais l'indice."""
    if game.is_imposter(player_number):
        hint = game.hint if game.hints_enabled else None
        return RevealResult(role=ROLE_IMPOSTER, hint=hint)
    return RevealResult(role=ROLE_PLAYER, word=game.secret_word)


class RevealController:
    def __init__(self, registry: Optional[GameRegistry] = None) -> None:
        self.registry = registry or REGISTRY

    def reveal(self, game_id: str, player_number: int) -> RevealResult:
        """
        Révèle le rôle de `player_number` et le marque comme vu.

        Raises:
            GameNotFound: partie inconnue, expirée ou évincée pendant l'appel.
            InvalidPlayer: numéro hors 1..num_players.
        """
        game = self.registry.get(game_id)
        with game.lock:
            if game.evicted or game.is_expired(self.registry.now()):
                raise GameNotFound()
            if not 1 <= player_number <= game.num_players:
                raise InvalidPlayer(f"playerNumber must be between 1 and {game.num_players}")

            result = role_view(game, player_number)
            if player_number not in game.revealed:
                # disque d'abord : la mutation mémoire n'a lieu que si l'écriture a réussi
                revealed = game.revealed | {player_number}
                self.registry.save(game, revealed=revealed)
                game.revealed = revealed

        logger.debug("Player revealed", extra={"game_id": game_id, "player_number": player_number})
        return result


class SolutionDiscloser:
    def __init__(self, registry: Optional[GameRegistry] = None) -> None:
        self.registry = registry or REGISTRY

    def solution(self, game_id: str) -> Solution:
        game = self.registry.get(game_id)
        with game.lock:
            if game.evicted:
                raise GameNotFound()
            return Solution(word=game.secret_word, imposters=game.sorted_imposters())


REVEAL = RevealController()
SOLUTION = SolutionDiscloser()
