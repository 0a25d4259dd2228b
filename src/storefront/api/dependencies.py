"""Request dependencies shared by the routers.

Authentication happens upstream; the gateway forwards the authenticated user
id in the `X-User-Id` header.
"""

from fastapi import Header, HTTPException
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.user.user import User


def current_user_id(x_user_id: str = Header(default="")) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def current_user(x_user_id: str = Header(default="")) -> User:
    user_id = current_user_id(x_user_id)
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise HTTPException(status_code=401, detail="Unknown user") from None


def admin_user(x_user_id: str = Header(default="")) -> User:
    user = current_user(x_user_id)
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Administrator access required")
    return user
