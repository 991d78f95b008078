"""
Utils: random_utils.py
Rôle:
- Tirages aléatoires du moteur : places des imposteurs et mot secret.

Comportement:
- `sample_seats` tire `count` numéros distincts dans 1..num_players (sans remise).
- `pick_one` tire un élément uniformément dans une séquence non vide.
- `rng` permet de rejouer le tirage (déterministe pour tests / fairness).

Notes d'implémentation:
- On shuffle la liste complète des places puis on garde les `count` premières
  (shuffle-and-truncate) : coût linéaire quel que soit le ratio imposteurs/joueurs.
"""
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def sample_seats(
    num_players: int,
    count: int,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Tire `count` places distinctes parmi 1..num_players.

    Args:
        num_players: nombre de joueurs (places numérotées à partir de 1).
        count: nombre de places à tirer (0 <= count <= num_players).
        rng: générateur à utiliser (module `random` par défaut).

    Returns:
        List[int]: places tirées, triées par ordre croissant.
    """
    if count < 0 or count > num_players:
        raise ValueError("count must be between 0 and num_players")

    rng = rng or random
    seats = list(range(1, num_players + 1))
    rng.shuffle(seats)  # mélange in-place
    return sorted(seats[:count])


def pick_one(items: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """Choix uniforme d'un élément (séquence non vide)."""
    if not items:
        raise ValueError("cannot pick from an empty sequence")
    rng = rng or random
    return items[rng.randrange(len(items))]
