"""
Store owner endpoints
"""
from fastapi import APIRouter, Depends
from typing import List

from domain.entities import IdentityContext
from domain.value_objects import Role
from dependencies import get_aggregate_queries, get_identity, require_roles
from dtos.response import OwnerAggregateResponse, RaterResponse, StoreAggregateResponse
from services.aggregate_queries import AggregateQueries
from utils.error_handlers import handle_api_errors

router = APIRouter()

require_owner = require_roles(Role.OWNER)


@router.get("/owner/summary", response_model=OwnerAggregateResponse)
@handle_api_errors("Owner summary")
def owner_summary(
    identity: IdentityContext = Depends(require_owner),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """The caller's overall average plus a line per owned store."""
    aggregate = queries.owner_aggregate(identity.user_id)
    return OwnerAggregateResponse(
        owner_id=aggregate.owner_id,
        avg_rating=aggregate.avg_rating,
        rating_count=aggregate.rating_count,
        stores=[
            StoreAggregateResponse(
                store_id=s.store_id,
                avg_rating=s.avg_rating,
                rating_count=s.rating_count,
            )
            for s in aggregate.stores
        ],
    )


@router.get("/owner/store-raters/{store_id}", response_model=List[RaterResponse])
@handle_api_errors("Store raters")
def store_raters(
    store_id: str,
    identity: IdentityContext = Depends(get_identity),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """
    Users who rated one of the caller's stores.

    Only the store's owner may call this. Any other caller, and a request
    for a store that does not exist, gets 403.
    """
    return [
        RaterResponse(
            user_id=r.user_id,
            name=r.name,
            email=r.email,
            address=r.address,
            rating=r.rating,
            created_at=r.created_at,
            updated_at=r.updated_at,
        )
        for r in queries.store_raters(identity, store_id)
    ]
