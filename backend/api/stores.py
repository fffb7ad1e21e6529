"""
Store and rating endpoints

Listing stores with their averages, submitting ratings, and the per-store
aggregate with ETag revalidation.
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from typing import List

from constants import HTTPStatus
from domain.entities import IdentityContext
from dependencies import get_aggregate_queries, get_identity, get_rating_ledger
from dtos.request import SubmitRatingRequest
from dtos.response import RatingResponse, StoreAggregateResponse, StoreListingResponse
from services.aggregate_queries import AggregateQueries
from services.rating_ledger import RatingLedger
from utils.caching import cache_headers, make_signature, maybe_304
from utils.error_handlers import handle_api_errors

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stores", response_model=List[StoreListingResponse])
@handle_api_errors("List stores")
def list_stores(
    identity: IdentityContext = Depends(get_identity),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """All stores by name, with the caller's own rating where one exists."""
    return [
        StoreListingResponse(
            id=s.id,
            name=s.name,
            address=s.address,
            avg_rating=s.avg_rating,
            rating_count=s.rating_count,
            user_rating=s.user_rating,
        )
        for s in queries.stores_for_user(identity.user_id)
    ]


@router.post("/stores/{store_id}/rating", response_model=RatingResponse)
@handle_api_errors("Submit rating")
def submit_rating(
    store_id: str,
    payload: SubmitRatingRequest,
    response: Response,
    identity: IdentityContext = Depends(get_identity),
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    """
    Create or overwrite the caller's rating of a store.

    Returns 201 when the rating was created and 200 when an existing rating
    was overwritten.
    """
    result = ledger.submit_rating(identity=identity, store_id=store_id, value=payload.rating)
    response.status_code = HTTPStatus.CREATED if result.created else HTTPStatus.OK
    return RatingResponse.from_result(result)


@router.get("/stores/{store_id}/aggregate", response_model=StoreAggregateResponse)
@handle_api_errors("Store aggregate")
def store_aggregate(
    store_id: str,
    request: Request,
    identity: IdentityContext = Depends(get_identity),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    aggregate = queries.store_aggregate(store_id)

    etag = make_signature(
        "store-aggregate",
        aggregate.store_id,
        aggregate.rating_count,
        aggregate.avg_rating,
        aggregate.last_rated_at.isoformat() if aggregate.last_rated_at else "",
    )
    if (resp := maybe_304(request, etag)):
        return resp

    body = StoreAggregateResponse(
        store_id=aggregate.store_id,
        avg_rating=aggregate.avg_rating,
        rating_count=aggregate.rating_count,
    )
    return JSONResponse(content=body.model_dump(), headers=cache_headers(etag))
