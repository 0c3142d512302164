"""FastAPI route for the stateless design proxy."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from controllers.proxy_controller import DesignProxyController

router = APIRouter(prefix="/api/design-proxy", tags=["design-proxy"])


class ProxyPayload(BaseModel):
    action: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None


def _get_design_client(request: Request):
    """Retrieve the shared design client from the app state."""
    design_client = getattr(request.app.state, "design_client", None)
    if design_client is None:
        raise HTTPException(status_code=500, detail="Design client not initialized.")
    return design_client


@router.post("", summary="Identify room objects or generate designs")
async def design_proxy(request: Request, body: ProxyPayload):
    """Handle one `{action, payload}` request from a browser frontend.

    Args:
        request: The FastAPI request containing application state.
        body: Action name and its camelCase payload.

    Returns:
        The action result keyed by `objects`, `elements` or `designs`.
    """
    try:
        controller = DesignProxyController(_get_design_client(request))
        return await controller.handle(body.action, body.payload)
    except HTTPException:
        raise
    except Exception as exc:  # pylint: disable=broad-exception-caught
        raise HTTPException(status_code=500, detail=f"Internal server error. {exc}") from exc
