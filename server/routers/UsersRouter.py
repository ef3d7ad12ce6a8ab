from fastapi import APIRouter, Depends, HTTPException, Query, Request

from server.dependencies.auth import verify_api_key
from server.models.responses import User, UsersPageResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    request: Request,
    search: str | None = None,
    limit: int | None = Query(default=None, ge=1),
    _: None = Depends(verify_api_key),
) -> list[User]:
    """List users as a plain JSON array, for single-page selectors.

    Args:
        request (Request): FastAPI request (provides app.state.user_catalog).
        search (str | None): Optional search text.
        limit (int | None): Optional maximum number of users.
        _ (None): Auth dependency result (unused).

    Returns:
        list[User]: The matching users.
    """
    users = request.app.state.user_catalog.search(search)
    return users[:limit] if limit else users


@router.get("/paged")
async def list_users_paged(
    request: Request,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=10, ge=1, le=100),
    _: None = Depends(verify_api_key),
) -> UsersPageResponse:
    """List users page by page, for paginated selectors (options live under "results").

    Args:
        request (Request): FastAPI request (provides app.state.user_catalog).
        search (str | None): Optional search text.
        page (int): 1-based page number.
        page_size (int): Users per page.
        _ (None): Auth dependency result (unused).

    Returns:
        UsersPageResponse: The requested page.
    """
    return request.app.state.user_catalog.get_page(search, page, page_size)


@router.get("/{user_id}")
async def get_user(
    request: Request,
    user_id: int,
    _: None = Depends(verify_api_key),
) -> User:
    """Return a single user.

    Raises:
        HTTPException: 404 if the user does not exist.
    """
    user = request.app.state.user_catalog.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user
