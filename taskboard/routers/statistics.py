from fastapi import APIRouter, Depends
from sqlmodel import Session

from ..database import get_db
from ..models import User
from ..schemas.common import ApiResponse
from ..schemas.statistics import UserStatistics
from ..services import collect_statistics
from .auth import get_current_user

router = APIRouter()


@router.get("", response_model=ApiResponse[UserStatistics])
def get_statistics(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Dashboard counters over every project the user can see."""
    return ApiResponse(data=collect_statistics(db, current_user.id))
