"""
Landmark endpoints
==================

GET /api/v1/landmarks?q=...                      -- substring search (blank -> [])
GET /api/v1/landmarks/nearby?lat=&lng=&radius=   -- Euclidean radius filter
GET /api/v1/landmarks/{landmark_id}              -- lookup by id
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from gocabs.api.dependencies import get_landmark_directory
from gocabs.api.middleware import RATE_LIMIT, limiter
from gocabs.api.schemas import ErrorResponse, LandmarkResponse
from gocabs.domain.entities import Landmark
from gocabs.domain.landmarks import LandmarkDirectory

router = APIRouter(prefix="/landmarks", tags=["landmarks"])


def to_response(landmark: Landmark) -> LandmarkResponse:
    return LandmarkResponse(
        id=landmark.id,
        name=landmark.name,
        address=landmark.address,
        lat=landmark.lat,
        lng=landmark.lng,
        category=landmark.category.value,
        description=landmark.description,
    )


@router.get("", response_model=list[LandmarkResponse], summary="Search landmarks")
@limiter.limit(RATE_LIMIT)
async def search_landmarks(
    request: Request,
    q: str = Query("", description="Matched against name, category and address."),
    directory: LandmarkDirectory = Depends(get_landmark_directory),
):
    return [to_response(lm) for lm in directory.search(q)]


@router.get(
    "/nearby",
    response_model=list[LandmarkResponse],
    summary="Landmarks within a radius (degrees)",
    responses={400: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMIT)
async def nearby_landmarks(
    request: Request,
    lat: float = Query(..., ge=-90, le=90),
    lng: float = Query(..., ge=-180, le=180),
    radius: float = Query(1.0),
    directory: LandmarkDirectory = Depends(get_landmark_directory),
):
    return [to_response(lm) for lm in directory.nearby(lat, lng, radius)]


@router.get(
    "/{landmark_id}",
    response_model=LandmarkResponse,
    summary="Get a landmark",
    responses={404: {"model": ErrorResponse}},
)
@limiter.limit(RATE_LIMIT)
async def get_landmark(
    request: Request,
    landmark_id: str,
    directory: LandmarkDirectory = Depends(get_landmark_directory),
):
    return to_response(directory.get(landmark_id))
