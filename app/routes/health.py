"""
Module routes/health.py
Rôle:
- Endpoint de santé (service OK + nombre de parties actives en mémoire).
"""
from fastapi import APIRouter

from app.config.settings import settings
from app.services.game_registry import REGISTRY

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
async def health():
    """Renvoie un OK minimal avec le nom de service configuré."""
    return {"ok": True, "service": settings.APP_NAME, "games": REGISTRY.count()}
