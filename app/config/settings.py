"""
Configuration de l'application (Settings)
=========================================

Rôle
----
- Centraliser les paramètres du serveur de jeu (nom, host/port, TTL des parties,
  catalogue de catégories, persistance optionnelle…).
- Les valeurs par défaut conviennent pour un environnement de dev local.
- Les variables peuvent être surchargées via un fichier `.env` ou l'environnement.

Intégrations
------------
- `pydantic-settings` charge automatiquement les variables d'env et `.env`.
- Les services/routers importent `from app.config.settings import settings`.

Bonnes pratiques
----------------
- `GAME_TTL_SECONDS` borne la durée de vie d'une partie : le client sait gérer
  une partie expirée (404 "Game not found") et propose d'en relancer une.
- `RANDOM_SEED` ne doit être fixé qu'en test : en prod, graine système.
- `DATA_DIR` calcule un chemin relatif au repo : `<repo>/app/data`.

Exemples de `.env`
------------------
APP_NAME="Imposter Backend (Staging)"
PORT=8080
GAME_TTL_SECONDS=3600
PERSIST_GAMES=true
DATA_DIR="/var/opt/imposter/data"
"""
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
import os


class Settings(BaseSettings):
    # Nom du service (apparaît dans /health)
    APP_NAME: str = "Imposter Backend"
    # Bind réseau (FastAPI / Uvicorn)
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # Origines CORS autorisées (l'app mobile n'envoie pas d'Origin, le web oui)
    ALLOWED_ORIGINS: List[str] = ["*"]

    # Répertoire des fichiers (catalogue intégré, parties persistées)
    # Par défaut: <repo>/app/data
    DATA_DIR: str = os.path.join(os.path.dirname(os.path.dirname(__file__)), "data")
    CATEGORIES_FILE: str = "categories.json"

    # Cycle de vie des parties
    GAME_TTL_SECONDS: int = 24 * 3600
    SWEEP_INTERVAL_SECONDS: float = 60.0
    # Copie disque des parties (utile pour survivre à un redémarrage)
    PERSIST_GAMES: bool = False

    # Graine du PRNG (une seule par processus, jamais par partie)
    RANDOM_SEED: Optional[int] = None

    # Bornes de configuration d'une partie (miroir du clamp côté client)
    MIN_PLAYERS: int = 3
    MAX_PLAYERS: int = 20

    # Paramétrage pydantic-settings :
    # - lit le fichier .env (UTF-8) si présent
    # - ignore les clés supplémentaires pour éviter les erreurs
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


# Instance unique importable partout : `settings`
settings = Settings()
