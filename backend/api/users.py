"""
Normal-user owner request endpoints
"""
from fastapi import APIRouter, Depends

from constants import HTTPStatus
from domain.entities import IdentityContext
from domain.value_objects import Role
from dependencies import get_owner_request_workflow, require_roles
from dtos.response import OwnerRequestDecisionResponse, OwnerRequestResponse, OwnerRequestStatusResponse
from services.owner_request_workflow import OwnerRequestWorkflow
from utils.error_handlers import handle_api_errors

router = APIRouter()

require_normal = require_roles(Role.NORMAL)


@router.post("/user/request-owner", response_model=OwnerRequestDecisionResponse, status_code=HTTPStatus.CREATED)
@handle_api_errors("Request owner upgrade")
def request_owner(
    identity: IdentityContext = Depends(require_normal),
    workflow: OwnerRequestWorkflow = Depends(get_owner_request_workflow),
):
    """
    Ask to become a store owner.

    Each account may do this once. A second call returns 409 whatever the
    first request's status, including after a rejection.
    """
    request = workflow.request_owner_upgrade(identity=identity)
    return OwnerRequestDecisionResponse(
        message="Owner request submitted",
        request=OwnerRequestResponse.from_model(request),
    )


@router.get("/user/owner-request-status", response_model=OwnerRequestStatusResponse)
@handle_api_errors("Owner request status")
def owner_request_status(
    identity: IdentityContext = Depends(require_normal),
    workflow: OwnerRequestWorkflow = Depends(get_owner_request_workflow),
):
    request = workflow.get_own_request(identity)
    if request is None:
        return OwnerRequestStatusResponse(request=None, message="No request found")
    return OwnerRequestStatusResponse(request=OwnerRequestResponse.from_model(request))
