"""Request-scoped inputs shared by the routers."""

from fastapi import Header, HTTPException


def current_customer_id(x_customer_id: str = Header(default="")) -> str:
    """Customer identity asserted by the authentication layer in front of the API."""
    if not x_customer_id:
        raise HTTPException(status_code=401, detail="Missing customer identity")
    return x_customer_id


def current_customer_email(x_customer_email: str = Header(default="")) -> str | None:
    return x_customer_email or None
