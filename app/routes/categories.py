"""
Module routes/categories.py
Rôle:
- Catalogue public des catégories intégrées (id + nom, sans les mots).

Front:
- Écran de sélection : fusionné avec les catégories perso stockées sur l'appareil.
"""
from typing import List

from fastapi import APIRouter

from app.models.category import CategorySummary
from app.services.category_store import CATEGORIES

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=List[CategorySummary])
def list_categories():
    return CATEGORIES.all()
