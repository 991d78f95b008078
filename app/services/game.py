"""
Service: game.py
Rôle :
- Enregistrement d'une partie côté serveur (éphémère) : paramètres, mot secret,
  places des imposteurs et suivi des révélations.

Invariants :
- 1 <= num_imposters < num_players ; imposter_seats ⊆ {1..num_players}.
- `secret_word`, `hint` et `imposter_seats` sont figés à la création.
- Seul `revealed` évolue, toujours sous `lock`.
- `evicted` passe à True (sous `lock`) avant le retrait du registre.

Stockage optionnel : `to_dict()` / `from_dict()` (places stockées en listes triées).
"""
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Dict, FrozenSet, Optional, Set
import time


@dataclass
class Game:
    game_id: str
    num_players: int
    num_imposters: int
    hints_enabled: bool
    secret_word: str
    hint: Optional[str]
    imposter_seats: FrozenSet[int]
    category_ids: tuple = ()
    created_at: float = field(default_factory=time.time)
    expires_at: float = 0.0
    revealed: Set[int] = field(default_factory=set)
    evicted: bool = False
    lock: RLock = field(default_factory=RLock, init=False, repr=False, compare=False)

    def is_imposter(self, player_number: int) -> bool:
        return player_number in self.imposter_seats

    def is_expired(self, now: Optional[float] = None) -> bool:
        if not self.expires_at:
            return False
        return (now if now is not None else time.time()) >= self.expires_at

    def sorted_imposters(self) -> list[int]:
        return sorted(self.imposter_seats)

    # -----------------------------
    # Sérialisation
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        with self.lock:
            return {
                "game_id": self.game_id,
                "num_players": self.num_players,
                "num_imposters": self.num_imposters,
                "hints_enabled": self.hints_enabled,
                "secret_word": self.secret_word,
                "hint": self.hint,
                "imposter_seats": self.sorted_imposters(),
                "category_ids": list(self.category_ids),
                "created_at": self.created_at,
                "expires_at": self.expires_at,
                "revealed": sorted(self.revealed),
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        return cls(
            game_id=str(data["game_id"]),
            num_players=int(data["num_players"]),
            num_imposters=int(data["num_imposters"]),
            hints_enabled=bool(data.get("hints_enabled", False)),
            secret_word=str(data["secret_word"]),
            hint=data.get("hint"),
            imposter_seats=frozenset(int(s) for s in data.get("imposter_seats", [])),
            category_ids=tuple(data.get("category_ids") or ()),
            created_at=float(data.get("created_at") or time.time()),
            expires_at=float(data.get("expires_at") or 0.0),
            revealed={int(p) for p in data.get("revealed", [])},
        )
