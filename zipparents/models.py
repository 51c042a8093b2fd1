"""Modèles Pydantic pour les requêtes et réponses."""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

AgeRange = Literal["18-24", "25-34", "35-44", "45-54", "55+"]
RelationshipStatus = Literal["single", "partnered", "married", "prefer-not-to-say"]
ProfileVisibility = Literal["public", "verified-only", "private"]
SearchRadius = Literal[5, 10, 25, 50, 100]

ZIP_CODE_PATTERN = r"^\d{5}$"


class CamelModel(BaseModel):  # pylint: disable=too-few-public-methods
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProfileRecord(CamelModel):  # pylint: disable=too-few-public-methods
    """Profil tel que stocké dans la table des profils."""
    uid: str
    display_name: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    age_range: Optional[AgeRange] = None
    zip_code: str
    interests: List[str] = Field(default_factory=list)
    children_age_ranges: List[str] = Field(default_factory=list)
    relationship_status: Optional[RelationshipStatus] = None
    verification_status: Optional[str] = None
    profile_completeness: Optional[int] = None
    last_active: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None

    # Privacy settings
    show_email: bool = False
    show_phone: bool = False
    show_exact_location: bool = True
    profile_visibility: ProfileVisibility = "public"


class PublicProfile(CamelModel):  # pylint: disable=too-few-public-methods
    """Profil nettoyé, visible par les autres parents."""
    uid: str
    display_name: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None
    age_range: Optional[AgeRange] = None
    zip_code: str  # may be partial ("100XX") depending on privacy
    interests: List[str] = Field(default_factory=list)
    children_age_ranges: List[str] = Field(default_factory=list)
    relationship_status: Optional[RelationshipStatus] = None
    verification_status: Optional[str] = None
    profile_completeness: Optional[int] = None
    last_active: Optional[str] = None

    email: Optional[str] = None
    phone_number: Optional[str] = None

    shows_exact_location: bool
    is_public: bool


class SearchFilters(CamelModel):  # pylint: disable=too-few-public-methods
    """Filtres d'une recherche de parents."""
    zip_code: str
    radius: SearchRadius = 25
    age_range: Optional[Union[AgeRange, List[AgeRange]]] = None
    interests: Optional[List[str]] = None
    children_age_ranges: Optional[List[str]] = None
    relationship_status: Optional[List[RelationshipStatus]] = None
    limit: Optional[int] = Field(default=None, gt=0)


class SearchRequest(SearchFilters):  # pylint: disable=too-few-public-methods
    """Corps de POST /search : les filtres plus l'identifiant du demandeur."""
    user_id: str
    zip_code: str = Field(pattern=ZIP_CODE_PATTERN)

    def to_filters(self) -> SearchFilters:
        """Return the filters without the requester id."""
        return SearchFilters.model_validate(self.model_dump(exclude={"user_id"}))


class SearchResult(CamelModel):  # pylint: disable=too-few-public-methods
    """Un parent trouvé et sa distance (miles) au code postal recherché."""
    profile: PublicProfile
    distance: Optional[float] = None


class SearchResponse(CamelModel):  # pylint: disable=too-few-public-methods
    """Réponse de recherche."""
    results: List[SearchResult]
    total: int  # nombre de résultats renvoyés, après troncature
    has_more: bool


class ProximityMatch(CamelModel):  # pylint: disable=too-few-public-methods
    """A zip code and its distance to the target zip code."""
    zip_code: str
    distance: float


class ZipCodeDistance(CamelModel):  # pylint: disable=too-few-public-methods
    """Distance entre deux codes postaux, None si l'un est inconnu."""
    from_zip_code: str
    to_zip_code: str
    distance: Optional[float] = None


class ZipCodeCoordinates(CamelModel):  # pylint: disable=too-few-public-methods
    """Coordonnées d'un code postal connu."""
    zip_code: str
    lat: float
    lng: float
