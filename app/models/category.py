"""
Models / category.py
Rôle:
- Définir les catégories de mots échangées avec le client (intégrées ou personnalisées).

Champs:
- WordEntry: un mot secret et son indice optionnel (donné aux imposteurs si activé).
- Category: id + nom + liste de mots. Les catégories perso vivent sur l'appareil
  et ne sont envoyées qu'à la création d'une partie.
- CategorySummary: vue publique du catalogue (`GET /categories`), sans les mots.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class WordEntry(BaseModel):
    """Mot secret + indice optionnel."""
    word: str
    hint: Optional[str] = None  # absent → aucun indice textuel pour les imposteurs


class Category(BaseModel):
    """Catégorie complète (référentiel intégré ou payload perso du client)."""
    id: str
    name: str = ""
    words: List[WordEntry] = Field(default_factory=list)


class CategorySummary(BaseModel):
    """Entrée publique du catalogue intégré."""
    id: str
    name: str
