"""Main module for the FastAPI application."""
import json
from contextlib import asynccontextmanager
from typing import List

import asyncpg
from fastapi import Depends, FastAPI, HTTPException, Query, status

from .config import settings
from .db.postgres_connector import PostgresConnector
from .db.profile_store import ProfileStore
from .geo.proximity import ZipCodeDirectory, zip_directory
from .logger import logger
from .models import (
    ProximityMatch,
    SearchRequest,
    SearchResponse,
    SearchResult,
    ZIP_CODE_PATTERN,
    ZipCodeCoordinates,
    ZipCodeDistance,
)
from .search.search_service import SearchService
from .search.search_utils import SearchUtils


# --- Initialisation des variables globales ---

# Connecteur de base de données (le pool est ouvert au démarrage)
db_connector: PostgresConnector = PostgresConnector(settings.DATABASE_URL)

profile_store: ProfileStore = ProfileStore(db_connector, settings.PROFILES_TABLE)

search_service: SearchService = SearchService(
    profile_store=profile_store,
    utils=SearchUtils(zip_directory),
)
# Alias `service` : les tests remplacent `main.service`
service = search_service


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle FastAPI startup and shutdown events."""
    logger.info("Starting up ZipParents search API...")
    try:
        await db_connector.connect()
        logger.info("PostgreSQL connection pool established successfully.")
    except (OSError, asyncpg.PostgresError) as e:
        logger.error("Failed to connect to PostgreSQL: {error}", error=e)

    yield

    logger.info("Shutting down ZipParents search API...")
    await db_connector.close()
    logger.info("PostgreSQL connection pool closed.")


app = FastAPI(
    title="ZipParents - Parent Search Service",
    lifespan=lifespan,
)


def get_service() -> SearchService:
    """Dépendance FastAPI pour obtenir le service de recherche."""
    return service


def get_profile_store() -> ProfileStore:
    """Dépendance FastAPI pour obtenir le dépôt de profils."""
    return profile_store


def get_zip_directory() -> ZipCodeDirectory:
    """Dépendance FastAPI pour obtenir l'annuaire des codes postaux."""
    return zip_directory


def get_radius(radius: int = settings.DEFAULT_SEARCH_RADIUS) -> int:
    """Rayon de recherche (miles), limité aux valeurs proposées."""
    if radius not in settings.SEARCH_RADIUS_OPTIONS:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"radius must be one of {settings.SEARCH_RADIUS_OPTIONS}",
        )
    return radius


@app.post("/search", response_model=SearchResponse)
async def search(req: SearchRequest, svc: SearchService = Depends(get_service)):
    """POST /search : recherche de parents par code postal, rayon et profil."""
    try:
        pretty_request_body = json.dumps(req.model_dump(), indent=2, ensure_ascii=False)
        logger.info("Received request:\n{request_body}", request_body=pretty_request_body)

        return await svc.search_parents(req.user_id, req.to_filters())
    except Exception as e:
        logger.exception("Error processing search request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search failed"},
        ) from e


@app.get("/parents/nearby", response_model=List[SearchResult])
async def nearby_parents(
    user_id: str = Query(..., alias="userId"),
    zip_code: str = Query(..., alias="zipCode", pattern=ZIP_CODE_PATTERN),
    radius: int = Depends(get_radius),
    limit: int = Query(settings.NEARBY_DEFAULT_LIMIT, gt=0),
    svc: SearchService = Depends(get_service),
):
    """Parents proches d'un code postal, du plus proche au plus lointain."""
    try:
        return await svc.get_nearby_parents(user_id, zip_code, radius, limit)
    except Exception as e:
        logger.exception("Error processing nearby request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search failed"},
        ) from e


@app.get("/parents/{user_id}/similar", response_model=List[SearchResult])
async def similar_parents(
    user_id: str,
    radius: int = Depends(get_radius),
    limit: int = Query(settings.NEARBY_DEFAULT_LIMIT, gt=0),
    svc: SearchService = Depends(get_service),
    store: ProfileStore = Depends(get_profile_store),
):
    """Parents proches partageant les centres d'intérêt du demandeur."""
    try:
        profile = await store.get_profile(user_id)
    except Exception as e:
        logger.exception("Error loading profile {user_id}", user_id=user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search failed"},
        ) from e

    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

    try:
        return await svc.search_similar_parents(user_id, profile, radius, limit)
    except Exception as e:
        logger.exception("Error processing similar-parents request")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "search failed"},
        ) from e


@app.get("/zipcodes/{zip_code}", response_model=ZipCodeCoordinates)
def zip_code_coordinates(
    zip_code: str, directory: ZipCodeDirectory = Depends(get_zip_directory)
):
    """Coordonnées d'un code postal connu."""
    coordinate = directory.lookup(zip_code)
    if coordinate is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown zip code")
    return ZipCodeCoordinates(zip_code=coordinate.zip_code, lat=coordinate.lat, lng=coordinate.lng)


@app.get("/zipcodes/{zip_code}/nearby", response_model=List[ProximityMatch])
def nearby_zip_codes(
    zip_code: str,
    radius: int = Depends(get_radius),
    directory: ZipCodeDirectory = Depends(get_zip_directory),
):
    """Codes postaux connus dans le rayon, du plus proche au plus lointain."""
    return directory.zip_codes_within_radius(zip_code, radius)


@app.get("/zipcodes/{from_zip}/distance/{to_zip}", response_model=ZipCodeDistance)
def zip_code_distance(
    from_zip: str,
    to_zip: str,
    directory: ZipCodeDirectory = Depends(get_zip_directory),
):
    """Distance en miles entre deux codes postaux (null si l'un est inconnu)."""
    return ZipCodeDistance(
        from_zip_code=from_zip,
        to_zip_code=to_zip,
        distance=directory.get_zip_code_distance(from_zip, to_zip),
    )


@app.get("/")
def root():
    """Root endpoint to check API status."""
    return {"status": "ok", "message": "ZipParents search API is running 🚀"}


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Monitoring"])
async def health_check():
    """
    Health check endpoint.

    Returns 200 OK if the database is reachable, otherwise 503 Service Unavailable.
    """
    services_status = {"database": "ok"}
    try:
        await db_connector.execute_query("SELECT 1")
    except (OSError, asyncpg.PostgresError):
        services_status["database"] = "error"
        logger.error("Health check failed: Database connection error.")

    if "error" in services_status.values():
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=services_status)

    return services_status
