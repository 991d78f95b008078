"""
Game registry
=============

Registre en mémoire `game_id -> Game`, avec expiration (TTL) et copie disque
optionnelle (`games/<game_id>.json`).

Verrouillage :
- `_LOCK` du registre : protège uniquement le dict (opérations courtes).
- `game.lock` : sérialise les mutations d'une partie ; deux parties différentes
  ne se bloquent jamais.
- Éviction : la partie est d'abord marquée `evicted` sous son verrou, puis retirée
  du dict. Un reveal concurrent échoue donc proprement en `GameNotFound`.

Le balayage périodique (`run_sweeper`) est lancé au démarrage de l'app.
"""
from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional

import orjson

from app.config.settings import settings
from .errors import GameNotFound
from .game import Game
from .io_utils import delete_json, read_json, write_json

logger = logging.getLogger(__name__)

GAMES_DIR = Path(settings.DATA_DIR) / "games"


class GameRegistry:
    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        *,
        games_dir: Optional[Path] = None,
        persist: bool = False,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = settings.GAME_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self.games_dir = games_dir or GAMES_DIR
        self.persist = persist
        self.clock = clock
        self._games: Dict[str, Game] = {}
        self._lock = RLock()

    def now(self) -> float:
        return self.clock()

    # -----------------------------
    # Accès
    # -----------------------------
    def put(self, game: Game) -> Game:
        """Enregistre une partie (pose `expires_at` si absent) et la persiste si activé."""
        if not game.expires_at:
            game.expires_at = game.created_at + self.ttl_seconds
        self.save(game)
        with self._lock:
            self._games[game.game_id] = game
        return game

    def get(self, game_id: str) -> Game:
        """
        Retourne la partie `game_id`.
        Raises:
            GameNotFound: inconnue, évincée ou expirée (éviction paresseuse dans ce cas).
        """
        with self._lock:
            game = self._games.get(game_id)
        if game is None or game.evicted:
            raise GameNotFound()
        if game.is_expired(self.now()):
            self.evict(game_id)
            raise GameNotFound()
        return game

    def evict(self, game_id: str) -> bool:
        """Retire une partie du registre (et du disque). True si elle existait."""
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            return False
        with game.lock:
            game.evicted = True
        with self._lock:
            if self._games.get(game_id) is game:
                del self._games[game_id]
        if self.persist:
            delete_json(self._path(game_id))
        logger.debug("Game evicted", extra={"game_id": game_id})
        return True

    def sweep(self) -> List[str]:
        """Évince toutes les parties expirées ; renvoie leurs ids."""
        now = self.now()
        with self._lock:
            expired = [gid for gid, game in self._games.items() if game.is_expired(now)]
        evicted = [gid for gid in expired if self.evict(gid)]
        if evicted:
            logger.info("Expired games swept", extra={"evicted": len(evicted), "remaining": self.count()})
        return evicted

    def count(self) -> int:
        with self._lock:
            return len(self._games)

    def ids(self) -> List[str]:
        with self._lock:
            return list(self._games.keys())

    def clear(self) -> None:
        """Vide le cache mémoire (sans toucher aux fichiers)."""
        with self._lock:
            games = list(self._games.values())
            self._games.clear()
        for game in games:
            with game.lock:
                game.evicted = True

    # -----------------------------
    # Persistance (optionnelle)
    # -----------------------------
    def _path(self, game_id: str) -> Path:
        return self.games_dir / f"{game_id}.json"

    def save(self, game: Game, revealed: Optional[Iterable[int]] = None) -> None:
        """
        Écrit la partie sur disque si la persistance est active.
        `revealed` permet d'écrire l'état futur avant de muter l'objet en mémoire.
        """
        if not self.persist:
            return
        data = game.to_dict()
        if revealed is not None:
            data["revealed"] = sorted(revealed)
        write_json(self._path(game.game_id), data)

    def load_persisted(self) -> int:
        """Recharge les parties non expirées depuis le disque ; supprime les expirées."""
        if not self.persist or not self.games_dir.exists():
            return 0
        now = self.now()
        loaded = 0
        for path in sorted(self.games_dir.glob("*.json")):
            try:
                game = Game.from_dict(read_json(path))
            except (orjson.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Unreadable persisted game", extra={"path": str(path), "error": str(exc)})
                continue
            if not game.expires_at:
                game.expires_at = game.created_at + self.ttl_seconds
            if game.is_expired(now):
                delete_json(path)
                continue
            with self._lock:
                self._games[game.game_id] = game
            loaded += 1
        logger.info("Persisted games restored", extra={"games": loaded})
        return loaded

    # -----------------------------
    # Balayage périodique
    # -----------------------------
    async def run_sweeper(self, interval: Optional[float] = None) -> None:
        """Boucle de balayage (tâche asyncio, annulée à l'arrêt de l'app)."""
        period = interval or settings.SWEEP_INTERVAL_SECONDS
        while True:
            await asyncio.sleep(period)
            try:
                # hors boucle : le balayage prend des verrous de partie et touche le disque
                await asyncio.to_thread(self.sweep)
            except Exception:
                # la boucle doit survivre : on journalise et on attend le prochain tour
                logger.exception("Game sweep failed")


REGISTRY = GameRegistry(
    ttl_seconds=settings.GAME_TTL_SECONDS,
    games_dir=GAMES_DIR,
    persist=settings.PERSIST_GAMES,
)
