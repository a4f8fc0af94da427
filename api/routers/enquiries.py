"""
Enquiry API Endpoints.

`/api/contact` emails the enquiry to the business and the customer.
`/api/crm` proxies the enquiry to the CRM webhook so the browser never calls
it directly.

Both accept every method so the shared pipeline can answer preflight and
reject anything other than POST with the relay's own responses.
"""

import json
from typing import Any, Tuple

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from api.dependencies import get_runtime
from api.models import EnquiryAcceptedResponse, ErrorResponse
from services.config import RelayConfig
from services.enquiry_pipeline import (
    DispatchBackend,
    RelayRequest,
    RelayResponse,
    handle_enquiry,
)
from services.runtime import RelayClients

router = APIRouter()

_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_NO_CONTENT_STATUSES = {204, 304}

_ERROR_RESPONSES: dict = {
    400: {"model": ErrorResponse, "description": "Required fields missing"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    429: {"model": ErrorResponse, "description": "Too many requests from this address"},
    500: {"model": ErrorResponse, "description": "Delivery failed"},
}


async def _to_relay_request(request: Request) -> RelayRequest:
    raw = await request.body()
    body: Any = None
    if raw.strip():
        try:
            body = json.loads(raw)
        except ValueError:
            body = None

    headers: dict = dict(request.headers)
    forwarded = request.headers.getlist("x-forwarded-for")
    if len(forwarded) > 1:
        headers["x-forwarded-for"] = forwarded

    return RelayRequest(
        method=request.method,
        headers=headers,
        body=body,
        remote_addr=request.client.host if request.client else None,
    )


def _to_response(result: RelayResponse) -> Response:
    if result.body is None or result.status_code in _NO_CONTENT_STATUSES:
        return Response(status_code=result.status_code, headers=result.headers)
    return JSONResponse(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


async def _relay(request: Request, runtime: Tuple[RelayConfig, RelayClients], backend: DispatchBackend) -> Response:
    config, clients = runtime
    relay_request = await _to_relay_request(request)
    # Provider calls block, so the pipeline runs off the event loop.
    result = await run_in_threadpool(handle_enquiry, relay_request, config, clients, backend)
    return _to_response(result)


@router.api_route(
    "/api/contact",
    methods=_METHODS,
    response_model=EnquiryAcceptedResponse,
    responses=_ERROR_RESPONSES,
    summary="Submit Contact Enquiry",
    description="Email a website enquiry to the business inbox and send the customer a confirmation."
)
async def submit_contact_enquiry(request: Request, runtime=Depends(get_runtime)):
    """
    Submit a contact form enquiry.

    **Process:**
    1. Rate limits by client address (5 requests per 10 minutes)
    2. Silently drops likely bots (honeypot field or sub-1.5s completion)
    3. Validates required fields
    4. Sends the business notification, then the customer confirmation

    **Example request:**
    ```json
    {
      "name": "Jane Doe",
      "businessName": "Acme Ltd",
      "email": "jane@acme.com",
      "phone": "07000000000",
      "currentSupplier": "EDF",
      "marketingOptIn": true,
      "formStartedAt": 1760000000000
    }
    ```
    """
    return await _relay(request, runtime, DispatchBackend.EMAIL)


@router.api_route(
    "/api/crm",
    methods=_METHODS,
    responses={
        429: {"model": ErrorResponse, "description": "Too many requests from this address"},
        500: {"model": ErrorResponse, "description": "CRM relay failed"},
    },
    summary="Relay Enquiry to CRM",
    description="Forward a website enquiry to the CRM webhook. Upstream status and body are passed through."
)
async def relay_crm_enquiry(request: Request, runtime=Depends(get_runtime)):
    """
    Proxy an enquiry to the CRM.

    Rate limiting and bot checks apply; field validation is left to the CRM.
    """
    return await _relay(request, runtime, DispatchBackend.CRM)
