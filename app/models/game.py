"""
Models / game.py
Rôle:
- Schémas Pydantic des requêtes/réponses de l'API `/games`.

Notes:
- Le client parle en camelCase (`numPlayers`, `gameId`…) : alias générés via `to_camel`,
  `populate_by_name` permet aussi la construction en snake_case côté Python.
- Les bornes (joueurs, imposteurs) ne sont PAS validées ici mais dans `GameFactory`,
  pour renvoyer un `InvalidParameters` homogène.
- `RevealResponse` omet `word`/`hint` quand ils sont absents (route en `exclude_none`).
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.category import Category

Role = Literal["player", "imposter"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateGamePayload(_CamelModel):
    category_ids: List[str]
    num_players: int
    num_imposters: int
    hints_enabled: bool = False
    # catégories perso référencées par `category_ids` (mots envoyés à la volée)
    custom_categories: Optional[List[Category]] = Field(default=None)


class CreateGameResponse(_CamelModel):
    game_id: str
    num_players: int


class RevealPayload(_CamelModel):
    player_number: int


class RevealResponse(_CamelModel):
    role: Role
    word: Optional[str] = None
    hint: Optional[str] = None


class SolutionResponse(_CamelModel):
    word: str
    imposters: List[int]
