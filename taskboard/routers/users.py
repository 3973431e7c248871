from typing import List

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_user_store
from ..models import User
from ..schemas.common import ApiResponse
from ..schemas.user import User as UserSchema
from ..services import UserStore
from .auth import get_current_user

router = APIRouter()


@router.get("/search", response_model=ApiResponse[List[UserSchema]])
def search_users(
    q: str = Query(..., min_length=1, max_length=255),
    limit: int = Query(10, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    users: UserStore = Depends(get_user_store),
):
    """Look up users by email fragment, e.g. to pick a collaborator."""
    matches = users.search_by_email(q, limit=limit)
    return ApiResponse(data=[UserSchema.model_validate(u) for u in matches])
