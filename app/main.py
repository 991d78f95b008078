"""
Application FastAPI — Point d'entrée
====================================

Rôle
----
- Instancie l'app FastAPI, configure le CORS pour les clients,
- Monte les routeurs REST (catégories, parties, santé),
- Traduit toutes les erreurs en `{"error": "<message>"}` (contrat du client mobile),
- Au démarrage : logging, catalogue, parties persistées, tâche de balayage TTL.

Notes
-----
- Le client affiche `error` tel quel, ou `HTTP <status>` à défaut : aucune route
  ne doit répondre avec le format FastAPI par défaut `{"detail": ...}`.
- ⚠️ Le middleware CORS doit être ajouté AVANT les include_router.
"""
import asyncio
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.routes.categories import router as categories_router
from app.routes.games import router as games_router
from app.routes.health import router as health_router

from app.config.settings import settings
from app.services.category_store import CATEGORIES
from app.services.errors import GameError
from app.services.game_registry import REGISTRY

logger = logging.getLogger(__name__)

# --- App FastAPI principale  ---
app = FastAPI(title="Imposter Backend")

# ===========================
# CORS
# ===========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=False,         # ← pas de cookie : les appels sont sans état
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===========================
# Montage des routers
# ===========================
app.include_router(categories_router)
app.include_router(games_router)
app.include_router(health_router)


# ===========================
# Erreurs → {"error": ...}
# ===========================
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(GameError)
async def game_error_handler(request: Request, exc: GameError):
    return _error(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else f"HTTP {exc.status_code}"
    return _error(exc.status_code, message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return _error(400, "Invalid request")
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid value")
    return _error(400, f"Invalid request: {loc}: {message}" if loc else f"Invalid request: {message}")


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return _error(500, "Internal server error")


# --- Racine utile pour "ping" simple (sans /health) ---
@app.get("/")
async def root():
    """Ping basique : permet de vérifier que l'app tourne."""
    return {"ok": True, "service": "imposter-backend"}


# --- Hooks de cycle de vie ---
_sweeper_task: Optional[asyncio.Task] = None


@app.on_event("startup")
async def on_startup():
    """
    Au démarrage:
    - configure le niveau de log,
    - recharge le catalogue intégré et les parties persistées (si activé),
    - lance le balayage périodique des parties expirées.
    """
    global _sweeper_task
    logging.basicConfig(level=settings.LOG_LEVEL)
    CATEGORIES.load()
    REGISTRY.load_persisted()
    _sweeper_task = asyncio.create_task(REGISTRY.run_sweeper(settings.SWEEP_INTERVAL_SECONDS))
    logger.info(
        "Service started",
        extra={"ttl_seconds": REGISTRY.ttl_seconds, "persist": REGISTRY.persist},
    )


@app.on_event("shutdown")
async def on_shutdown():
    global _sweeper_task
    if _sweeper_task is not None:
        _sweeper_task.cancel()
        try:
            await _sweeper_task
        except asyncio.CancelledError:
            pass
        _sweeper_task = None


def run() -> None:
    """Lance le serveur uvicorn (entrée console `imposter-backend`)."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
