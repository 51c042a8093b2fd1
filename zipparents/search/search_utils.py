"""
SearchUtils - filtres en mémoire et classement par distance.

Complète la requête envoyée au dépôt de profils : filtres multi-valeurs,
calcul des distances et tri.
"""
from typing import List, Optional, Sequence, Tuple

from zipparents.geo.proximity import ZipCodeDirectory, zip_directory
from zipparents.models import ProfileRecord, SearchFilters

RankedRecord = Tuple[ProfileRecord, Optional[float]]


def matches_any(requested: Optional[Sequence[str]], values: Sequence[str]) -> bool:
    """True si au moins une valeur demandée figure dans la liste du profil (OU logique)."""
    if not values:
        return False
    return any(item in values for item in requested or ())


class SearchUtils:
    """Filtrage et classement des profils candidats."""

    def __init__(self, directory: ZipCodeDirectory = zip_directory):
        self.directory = directory

    def apply_post_filters(
        self,
        records: List[ProfileRecord],
        filters: SearchFilters,
        exclude_uid: str,
    ) -> List[ProfileRecord]:
        """
        Applique les filtres que le dépôt ne peut pas exprimer seul.

        Les listes ``interests`` et ``children_age_ranges`` de plus d'un
        élément gardent un profil dès qu'une valeur correspond.

        Args:
            records: Profils renvoyés par le dépôt
            filters: Filtres de la recherche
            exclude_uid: uid du demandeur, jamais renvoyé

        Returns:
            Les profils retenus, dans l'ordre d'entrée
        """
        kept = [record for record in records if record.uid != exclude_uid]

        if filters.interests and len(filters.interests) > 1:
            kept = [r for r in kept if matches_any(filters.interests, r.interests)]

        if filters.children_age_ranges and len(filters.children_age_ranges) > 1:
            kept = [
                r for r in kept
                if matches_any(filters.children_age_ranges, r.children_age_ranges)
            ]

        return kept

    def rank_by_distance(
        self,
        records: List[ProfileRecord],
        zip_code: str,
        radius: float,
    ) -> List[RankedRecord]:
        """
        Calcule la distance de chaque profil et ne garde que ceux dans le rayon.

        Une distance inconnue (code postal absent de la table) exclut le profil.
        Tri croissant, None en dernier, stable à égalité.
        """
        ranked: List[RankedRecord] = []
        for record in records:
            distance = self.directory.get_zip_code_distance(zip_code, record.zip_code)
            if distance is None or distance > radius:
                continue
            ranked.append((record, distance))

        ranked.sort(key=lambda item: (item[1] is None, item[1] or 0.0))
        return ranked
