"""
Service: errors.py
Rôle:
- Taxonomie des erreurs métier du moteur de jeu.
- Chaque erreur porte son statut HTTP et le message renvoyé tel quel au client
  (le client affiche `error` ou, à défaut, `HTTP <status>`).

Le mapping vers `{"error": ...}` est fait par les handlers enregistrés dans `app.main`.
"""
from __future__ import annotations


class GameError(Exception):
    """Erreur métier de base (400 par défaut)."""

    status_code: int = 400
    default_message: str = "Invalid request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidParameters(GameError):
    default_message = "Invalid game parameters"


class EmptyWordPool(GameError):
    default_message = "No words available in the selected categories"


class InvalidPlayer(GameError):
    default_message = "Invalid player number"


class NotFound(GameError):
    status_code = 404
    default_message = "Not found"


class CategoryNotFound(NotFound):
    def __init__(self, category_id: str) -> None:
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class GameNotFound(NotFound):
    # Message exact attendu par le client pour afficher "partie expirée".
    default_message = "Game not found"
