"""
Service: game_factory.py
Rôle:
- Valider les paramètres d'une partie, tirer le mot secret et les places des
  imposteurs, puis enregistrer la partie dans le registre.

Règles:
- MIN_PLAYERS <= num_players <= MAX_PLAYERS (3..20 par défaut).
- 1 <= num_imposters < num_players.
- Le pool de mots est l'union des catégories résolues (doublons ignorés,
  comparaison insensible à la casse, premier indice conservé).
- Le PRNG est unique pour le processus (graine `RANDOM_SEED` ou entropie système).
"""
from __future__ import annotations

import logging
import random
from threading import RLock
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from app.config.settings import settings
from app.models.category import Category, WordEntry
from app.utils.random_utils import pick_one, sample_seats
from .category_store import CATEGORIES, CategoryStore
from .errors import EmptyWordPool, InvalidParameters
from .game import Game
from .game_registry import REGISTRY, GameRegistry

logger = logging.getLogger(__name__)


def validate_counts(num_players: int, num_imposters: int) -> None:
    """Lève `InvalidParameters` si les effectifs sont hors bornes."""
    low, high = settings.MIN_PLAYERS, settings.MAX_PLAYERS
    if not low <= num_players <= high:
        raise InvalidParameters(f"numPlayers must be between {low} and {high}")
    if not 1 <= num_imposters < num_players:
        raise InvalidParameters("numImposters must be at least 1 and less than numPlayers")


def build_word_pool(categories: Dict[str, Category]) -> List[WordEntry]:
    pool: List[WordEntry] = []
    seen = set()
    for category in categories.values():
        for entry in category.words:
            key = entry.word.casefold()
            if key in seen:
                continue
            seen.add(key)
            pool.append(entry)
    return pool


class GameFactory:
    def __init__(
        self,
        categories: Optional[CategoryStore] = None,
        registry: Optional[GameRegistry] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.categories = categories or CATEGORIES
        self.registry = registry or REGISTRY
        self.rng = rng or random.Random(settings.RANDOM_SEED)
        self._lock = RLock()

    def create(
        self,
        category_ids: Sequence[str],
        num_players: int,
        num_imposters: int,
        hints_enabled: bool = False,
        custom_categories: Sequence[Category] = (),
    ) -> Game:
        """
        Crée et enregistre une partie.

        Raises:
            InvalidParameters: effectifs hors bornes.
            CategoryNotFound: id inconnu (ni intégré ni perso).
            EmptyWordPool: aucune catégorie ne contient de mot utilisable.
        """
        validate_counts(num_players, num_imposters)

        resolved = self.categories.resolve(category_ids, custom_categories)
        pool = build_word_pool(resolved)
        if not pool:
            raise EmptyWordPool()

        # tirages sous verrou : le PRNG est partagé par toutes les requêtes
        with self._lock:
            entry = pick_one(pool, self.rng)
            seats = sample_seats(num_players, num_imposters, self.rng)

        game = Game(
            game_id=uuid4().hex,
            num_players=num_players,
            num_imposters=num_imposters,
            hints_enabled=bool(hints_enabled),
            secret_word=entry.word,
            hint=entry.hint if hints_enabled else None,
            imposter_seats=frozenset(seats),
            category_ids=tuple(resolved.keys()),
            created_at=self.registry.now(),
        )
        self.registry.put(game)

        logger.info(
            "Game created",
            extra={
                "game_id": game.game_id,
                "num_players": num_players,
                "num_imposters": num_imposters,
                "hints_enabled": game.hints_enabled,
                "pool_size": len(pool),
            },
        )
        return game


FACTORY = GameFactory()
