"""
Service: category_store.py
Rôle:
- Charger en mémoire le référentiel des catégories intégrées (catalogue statique).
- Résoudre une liste d'ids de catégories (intégrées + perso envoyées par le client).

Fichier source:
- app/data/categories.json → {"categories":[{id,name,words:[{word,hint?}]}]}

Remarques:
- Les catégories perso ne sont jamais ajoutées au catalogue : elles n'existent
  que le temps de la requête de création de partie.
- Un id présent à la fois dans le catalogue et dans le payload perso → catalogue.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from app.config.settings import settings
from app.models.category import Category, CategorySummary, WordEntry
from .errors import CategoryNotFound
from .io_utils import read_json

logger = logging.getLogger(__name__)

CATALOG_PATH = Path(settings.DATA_DIR) / settings.CATEGORIES_FILE


def _clean_words(words: Iterable[WordEntry]) -> List[WordEntry]:
    """Retire les mots vides et normalise les indices blancs en None."""
    cleaned: List[WordEntry] = []
    for entry in words:
        word = (entry.word or "").strip()
        if not word:
            continue
        hint = (entry.hint or "").strip() or None
        cleaned.append(WordEntry(word=word, hint=hint))
    return cleaned


class CategoryStore:
    """Catalogue des catégories intégrées.

    Exemple d'entrée:
    {
      "id": "animals",
      "name": "Animals",
      "words": [{"word": "Elephant", "hint": "Trunk"}, {"word": "Penguin"}]
    }
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = path or CATALOG_PATH
        self.catalog: Dict[str, Category] = {}
        self.load()

    def load(self) -> None:
        """Charge le JSON et indexe les catégories par id (ordre du fichier conservé)."""
        raw = read_json(self.path) or {"categories": []}
        catalog: Dict[str, Category] = {}
        for item in raw.get("categories", []):
            category = Category.model_validate(item)
            category.words = _clean_words(category.words)
            catalog[category.id] = category
        self.catalog = catalog
        logger.info("Category catalog loaded", extra={"categories": len(catalog), "path": str(self.path)})

    def get(self, category_id: str) -> Category | None:
        return self.catalog.get(category_id)

    def all(self) -> List[CategorySummary]:
        """Vue publique du catalogue (sans les mots)."""
        return [CategorySummary(id=c.id, name=c.name) for c in self.catalog.values()]

    def resolve(
        self,
        category_ids: Sequence[str],
        custom_categories: Sequence[Category] = (),
    ) -> Dict[str, Category]:
        """
        Associe chaque id demandé à sa catégorie.

        - Les doublons sont ignorés (première occurrence).
        - Ids intégrés d'abord, puis payload perso.
        - Les catégories perso non référencées par `category_ids` sont ignorées.

        Raises:
            CategoryNotFound: id inconnu du catalogue et absent du payload perso.
        """
        custom_by_id = {c.id: c for c in custom_categories}
        resolved: Dict[str, Category] = {}
        for cid in category_ids:
            if cid in resolved:
                continue
            category = self.catalog.get(cid)
            if category is None:
                custom = custom_by_id.get(cid)
                if custom is None:
                    raise CategoryNotFound(cid)
                category = Category(id=custom.id, name=custom.name, words=_clean_words(custom.words))
            resolved[cid] = category
        return resolved


CATEGORIES = CategoryStore()
