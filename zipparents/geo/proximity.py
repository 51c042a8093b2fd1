"""Recherche de proximité entre codes postaux."""
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from zipparents.geo.distance import calculate_distance
from zipparents.geo.zipcode_data import ZIP_CODE_DATABASE, ZipCoordinate
from zipparents.models import ProximityMatch


class ZipCodeDirectory:
    """
    Annuaire en lecture seule des coordonnées de codes postaux.

    La table est injectée à la construction puis figée ; l'instance peut être
    partagée entre requêtes sans verrou.
    """

    def __init__(self, coordinates: Mapping[str, ZipCoordinate] = ZIP_CODE_DATABASE):
        self._coordinates: Mapping[str, ZipCoordinate] = MappingProxyType(dict(coordinates))

    def __contains__(self, zip_code: object) -> bool:
        return zip_code in self._coordinates

    def __len__(self) -> int:
        return len(self._coordinates)

    @property
    def zip_codes(self) -> List[str]:
        """All known zip codes, in table order."""
        return list(self._coordinates.keys())

    def lookup(self, zip_code: str) -> Optional[ZipCoordinate]:
        """Return the coordinates of a zip code, None when it is not in the table."""
        return self._coordinates.get(zip_code)

    def get_zip_code_distance(self, zip_code1: str, zip_code2: str) -> Optional[float]:
        """
        Calcule la distance entre deux codes postaux.

        Returns:
            Distance en miles, ou None si l'un des codes est inconnu
        """
        coords1 = self.lookup(zip_code1)
        coords2 = self.lookup(zip_code2)
        if coords1 is None or coords2 is None:
            return None
        return calculate_distance(coords1.lat, coords1.lng, coords2.lat, coords2.lng)

    def within_radius(self, zip_code1: str, zip_code2: str, radius_miles: float) -> bool:
        """True iff both zip codes are known and at most radius_miles apart."""
        distance = self.get_zip_code_distance(zip_code1, zip_code2)
        return distance is not None and distance <= radius_miles

    def filter_by_proximity(
        self,
        target_zip_code: str,
        zip_codes: Iterable[str],
        radius_miles: float,
    ) -> List[ProximityMatch]:
        """
        Filtre une liste de codes postaux par proximité du code cible.

        Les codes inconnus sont ignorés. Le tri est stable : à distance égale
        l'ordre d'entrée est conservé.

        Args:
            target_zip_code: Code postal de référence
            zip_codes: Codes postaux candidats
            radius_miles: Distance maximale en miles

        Returns:
            Les codes dans le rayon, du plus proche au plus lointain
        """
        matches: List[ProximityMatch] = []
        for zip_code in zip_codes:
            distance = self.get_zip_code_distance(target_zip_code, zip_code)
            if distance is not None and distance <= radius_miles:
                matches.append(ProximityMatch(zip_code=zip_code, distance=distance))

        return sorted(matches, key=lambda match: match.distance)

    def zip_codes_within_radius(
        self, target_zip_code: str, radius_miles: float
    ) -> List[ProximityMatch]:
        """Every known zip code within radius_miles of the target, closest first."""
        return self.filter_by_proximity(target_zip_code, self.zip_codes, radius_miles)


# Instance globale réutilisable
zip_directory = ZipCodeDirectory()
