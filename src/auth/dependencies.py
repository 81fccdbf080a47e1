"""Authentication dependencies for FastAPI.

Sessions and tokens are handled by the gateway in front of this service; it
forwards the authenticated user's id in the ``X-User-Id`` header.
"""

from typing import Annotated

from fastapi import Header, HTTPException, status

USER_ID_HEADER = "X-User-Id"


async def get_optional_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str | None:
    """Get the forwarded user id, if any."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


async def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias=USER_ID_HEADER)] = None,
) -> str:
    """Get the forwarded user id, raising 401 if not authenticated."""
    user_id = await get_optional_user_id(x_user_id)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return user_id
