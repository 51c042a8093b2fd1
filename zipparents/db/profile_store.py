"""Accès en lecture seule à la table des profils."""
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from zipparents.config import settings
from zipparents.db.postgres_connector import PostgresConnector
from zipparents.logger import logger
from zipparents.models import ProfileRecord

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

PROFILE_COLUMNS = (
    "uid",
    "display_name",
    "photo_url",
    "bio",
    "age_range",
    "zip_code",
    "interests",
    "children_age_ranges",
    "relationship_status",
    "verification_status",
    "profile_completeness",
    "last_active",
    "email",
    "phone_number",
    "show_email",
    "show_phone",
    "show_exact_location",
    "profile_visibility",
)


@dataclass
class ProfileQuery:
    """
    Requête de profils par égalité / appartenance.

    Chaque liste vide ou None signifie "pas de contrainte". ``interests`` et
    ``children_age_ranges`` portent chacun un seul prédicat d'appartenance :
    un profil passe s'il contient au moins une des valeurs.
    """
    exclude_uid: str
    limit: int
    age_ranges: List[str] = field(default_factory=list)
    relationship_statuses: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    children_age_ranges: List[str] = field(default_factory=list)


class ProfileStore:
    """Dépôt des profils parents, adossé à PostgreSQL."""

    def __init__(self, db_connector: PostgresConnector, table_name: str = settings.PROFILES_TABLE):
        self.db = db_connector
        self.table_name = self._validate_table_name(table_name)

    def _validate_table_name(self, table_name: str) -> str:
        """
        Vérifie que le nom de table est un identifiant SQL simple.

        Le nom est interpolé dans la requête, il ne doit donc jamais contenir
        autre chose que lettres, chiffres et underscores.

        Raises:
            ValueError: Si le nom n'est pas un identifiant valide
        """
        if not isinstance(table_name, str) or not _IDENTIFIER_RE.match(table_name):
            raise ValueError(f"Invalid table name: {table_name!r}")
        return table_name

    def build_find_query(self, query: ProfileQuery) -> Tuple[str, List[Any]]:
        """
        Construit le SQL et ses paramètres pour une ProfileQuery.

        Returns:
            tuple: (sql, params) prêts pour ``execute_query``
        """
        params: List[Any] = [query.exclude_uid]
        clauses = ["uid <> $1"]

        def add(clause: str, value: Any) -> None:
            params.append(value)
            clauses.append(clause.format(n=len(params)))

        if query.age_ranges:
            add("age_range = ANY(${n}::text[])", list(query.age_ranges))
        if query.relationship_statuses:
            add("relationship_status = ANY(${n}::text[])", list(query.relationship_statuses))
        if query.interests:
            add("interests && ${n}::text[]", list(query.interests))
        if query.children_age_ranges:
            add("children_age_ranges && ${n}::text[]", list(query.children_age_ranges))

        params.append(query.limit)
        sql = (
            f"SELECT {', '.join(PROFILE_COLUMNS)} FROM {self.table_name} "  # nosec B608
            f"WHERE {' AND '.join(clauses)} "
            f"ORDER BY uid LIMIT ${len(params)}"
        )
        return sql, params

    async def find_profiles(self, query: ProfileQuery) -> List[ProfileRecord]:
        """Fetch at most ``query.limit`` profiles matching the query."""
        sql, params = self.build_find_query(query)
        logger.debug("ProfileStore SQL: {sql} | params={params}", sql=sql, params=params)
        rows = await self.db.execute_query(sql, *params)
        return [record for record in map(self._to_record, rows) if record is not None]

    async def get_profile(self, uid: str) -> Optional[ProfileRecord]:
        """Charge un profil par uid, None s'il n'existe pas ou si la ligne est invalide."""
        sql = (
            f"SELECT {', '.join(PROFILE_COLUMNS)} FROM {self.table_name} "  # nosec B608
            "WHERE uid = $1"
        )
        rows = await self.db.execute_query(sql, uid)
        if not rows:
            return None
        return self._to_record(rows[0])

    @staticmethod
    def _to_record(row: Dict[str, Any]) -> Optional[ProfileRecord]:
        """Convertit une ligne en ProfileRecord, None si la ligne est invalide."""
        data = dict(row)
        # NULL en base pour les tableaux vides
        for key in ("interests", "children_age_ranges"):
            if data.get(key) is None:
                data[key] = []
        for key, default in (("show_email", False), ("show_phone", False), ("show_exact_location", True)):
            if data.get(key) is None:
                data[key] = default
        if data.get("profile_visibility") is None:
            data["profile_visibility"] = "public"
        if data.get("last_active") is not None and not isinstance(data["last_active"], str):
            data["last_active"] = data["last_active"].isoformat()
        try:
            return ProfileRecord.model_validate(data)
        except ValidationError as e:
            # Une ligne corrompue ne doit pas faire échouer toute la recherche
            logger.warning(
                "Skipping invalid profile row {uid}: {errors}",
                uid=data.get("uid"),
                errors=e.errors(include_url=False),
            )
            return None
