"""Calcul de distance orthodromique (formule de haversine)."""
import math
from functools import lru_cache

from zipparents.config import settings


@lru_cache(maxsize=4096)
def calculate_distance(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    earth_radius: float = settings.EARTH_RADIUS_MILES,
) -> float:
    """
    Calcule la distance entre deux points avec la formule de haversine.

    Args:
        lat1: Latitude du premier point
        lng1: Longitude du premier point
        lat2: Latitude du second point
        lng2: Longitude du second point
        earth_radius: Rayon de la Terre (miles par défaut)

    Returns:
        Distance en miles, arrondie à une décimale
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return round_half_up(earth_radius * c)


def round_half_up(value: float, digits: int = 1) -> float:
    """Arrondi "au demi supérieur" (round() de Python arrondit au pair)."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
