"""
Admin API endpoints

Dashboard counts, user and store creation, owner aggregates, and the
owner-request queue with its approve/reject decisions.
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from constants import HTTPStatus
from domain.entities import IdentityContext
from domain.value_objects import Decision, OwnerRequestStatus, Role
from dependencies import (
    get_account_service,
    get_aggregate_queries,
    get_owner_request_workflow,
    require_roles,
)
from dtos.request import CreateStoreRequest, CreateUserRequest, RejectOwnerRequest
from dtos.response import (
    DashboardResponse,
    OwnerAggregateResponse,
    OwnerRequestDecisionResponse,
    OwnerRequestResponse,
    StoreAggregateResponse,
    StoreResponse,
    UserResponse,
)
from services.account_service import AccountService
from services.aggregate_queries import AggregateQueries
from services.owner_request_workflow import OwnerRequestWorkflow
from utils.error_handlers import handle_api_errors

router = APIRouter()

require_admin = require_roles(Role.ADMIN)


@router.get("/admin/summary", response_model=DashboardResponse)
@handle_api_errors("Admin summary")
def admin_summary(
    admin: IdentityContext = Depends(require_admin),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """Platform totals, recomputed on every call."""
    counts = queries.dashboard_counts()
    return DashboardResponse(
        user_count=counts.user_count,
        store_count=counts.store_count,
        rating_count=counts.rating_count,
        pending_request_count=counts.pending_request_count,
    )


@router.post("/admin/users", response_model=UserResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create user")
def admin_create_user(
    payload: CreateUserRequest,
    admin: IdentityContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    user = accounts.create_user(
        identity=admin,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        address=payload.address,
    )
    return UserResponse.model_validate(user)


@router.post("/admin/stores", response_model=StoreResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Create store")
def admin_create_store(
    payload: CreateStoreRequest,
    admin: IdentityContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    store = accounts.create_store(
        identity=admin,
        name=payload.name,
        email=payload.email,
        address=payload.address,
        owner_id=payload.owner_id,
    )
    return StoreResponse.model_validate(store)


@router.get("/admin/owners/{owner_id}/aggregate", response_model=OwnerAggregateResponse)
@handle_api_errors("Owner aggregate")
def admin_owner_aggregate(
    owner_id: str,
    admin: IdentityContext = Depends(require_admin),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """Average rating across every store the owner holds (0 when none are rated)."""
    aggregate = queries.owner_aggregate(owner_id)
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


@router.get("/admin/owner-requests", response_model=List[OwnerRequestResponse])
@handle_api_errors("List pending owner requests")
def admin_pending_requests(
    admin: IdentityContext = Depends(require_admin),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """Pending requests, oldest first."""
    return [OwnerRequestResponse.from_model(r) for r in queries.pending_requests()]


@router.get("/admin/owner-requests/all", response_model=List[OwnerRequestResponse])
@handle_api_errors("List owner requests")
def admin_all_requests(
    status: Optional[OwnerRequestStatus] = Query(None, description="pending, approved or rejected"),
    admin: IdentityContext = Depends(require_admin),
    queries: AggregateQueries = Depends(get_aggregate_queries),
):
    """Request history, newest first."""
    return [OwnerRequestResponse.from_model(r) for r in queries.all_requests(status)]


@router.post("/admin/owner-requests/{request_id}/approve", response_model=OwnerRequestDecisionResponse)
@handle_api_errors("Approve owner request")
def admin_approve_request(
    request_id: str,
    admin: IdentityContext = Depends(require_admin),
    workflow: OwnerRequestWorkflow = Depends(get_owner_request_workflow),
):
    """Approve a pending request and promote the requester to owner."""
    decided = workflow.decide_owner_request(
        identity=admin, request_id=request_id, decision=Decision.APPROVE
    )
    return OwnerRequestDecisionResponse(
        message="Owner request approved",
        request=OwnerRequestResponse.from_model(decided),
    )


@router.post("/admin/owner-requests/{request_id}/reject", response_model=OwnerRequestDecisionResponse)
@handle_api_errors("Reject owner request")
def admin_reject_request(
    request_id: str,
    payload: Optional[RejectOwnerRequest] = None,
    admin: IdentityContext = Depends(require_admin),
    workflow: OwnerRequestWorkflow = Depends(get_owner_request_workflow),
):
    """Reject a pending request. The requester cannot ask again."""
    decided = workflow.decide_owner_request(
        identity=admin,
        request_id=request_id,
        decision=Decision.REJECT,
        reason=payload.reason if payload else None,
    )
    return OwnerRequestDecisionResponse(
        message="Owner request rejected",
        request=OwnerRequestResponse.from_model(decided),
    )
