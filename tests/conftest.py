# tests/conftest.py
from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest

from zipparents.db.profile_store import ProfileQuery
from zipparents.models import ProfileRecord


def make_profile(uid: str, zip_code: str, **overrides) -> ProfileRecord:
    """Construit un ProfileRecord minimal pour les tests."""
    data = {
        "uid": uid,
        "display_name": f"Parent {uid}",
        "zip_code": zip_code,
        "age_range": "25-34",
        "interests": ["Playdates"],
        "children_age_ranges": ["0-2"],
        "relationship_status": "married",
        "email": f"{uid}@example.com",
        "phone_number": "555-0100",
    }
    data.update(overrides)
    return ProfileRecord(**data)


class FakeProfileStore:
    """Dépôt en mémoire qui applique les mêmes prédicats que ProfileStore."""

    def __init__(self, profiles: List[ProfileRecord]):
        self.profiles = profiles
        self.queries: List[ProfileQuery] = []

    async def find_profiles(self, query: ProfileQuery) -> List[ProfileRecord]:
        self.queries.append(query)
        rows = []
        for p in sorted(self.profiles, key=lambda p: p.uid):
            if p.uid == query.exclude_uid:
                continue
            if query.age_ranges and p.age_range not in query.age_ranges:
                continue
            if query.relationship_statuses and p.relationship_status not in query.relationship_statuses:
                continue
            if query.interests and not set(query.interests) & set(p.interests):
                continue
            if query.children_age_ranges and not set(query.children_age_ranges) & set(p.children_age_ranges):
                continue
            rows.append(p)
        return rows[:query.limit]

    async def get_profile(self, uid: str):
        return next((p for p in self.profiles if p.uid == uid), None)


# --- Mocks des clients de bas niveau ---

@pytest.fixture
def mock_db_connector():
    """Fixture pour un mock du connecteur PostgreSQL."""
    db_conn = MagicMock()
    db_conn.execute_query = AsyncMock(return_value=[])
    return db_conn


# --- Jeux de données ---

@pytest.fixture
def nyc_profiles():
    """Parents répartis entre Manhattan, Chicago, Los Angeles et un code inconnu."""
    return [
        make_profile("me", "10001", interests=["Playdates", "Music"]),
        make_profile("chelsea", "10011", interests=["Music"]),
        make_profile("midtown", "10018", interests=["Reading"], children_age_ranges=["6-12"]),
        make_profile("harlem", "10027", interests=["Sports"], age_range="35-44"),
        make_profile("inwood", "10034", interests=["Playdates"], relationship_status="single"),
        make_profile("la", "90001", interests=["Playdates", "Music"]),
        make_profile("chicago", "60601", interests=["Music"]),
        make_profile("unknown_zip", "99999", interests=["Music"]),
    ]


@pytest.fixture
def fake_store(nyc_profiles):
    return FakeProfileStore(nyc_profiles)


@pytest.fixture
def search_service(fake_store):
    """SearchService branché sur le dépôt en mémoire."""
    from zipparents.search.search_service import SearchService

    return SearchService(profile_store=fake_store)
