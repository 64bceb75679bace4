"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, HTTPException, Request


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_dealer_id(x_dealer_id: str | None = Header(default=None)) -> str:
    """
    Dealer scope for the request.

    The upstream identity layer resolves the signed-in user (or team member)
    to a dealer and forwards it as X-Dealer-ID.
    """
    if not x_dealer_id or not x_dealer_id.strip():
        raise HTTPException(status_code=400, detail="X-Dealer-ID header is required")
    return x_dealer_id.strip()
