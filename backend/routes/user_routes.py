from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.auth.dependencies import Caller, admin_only
from backend.database import get_db
from backend.repositories.users import UserRepository
from backend.schemas import UserSummaryResponse

router = APIRouter(tags=['users'])


@router.get('', response_model=list[UserSummaryResponse])
def list_students(caller: Caller = Depends(admin_only), db: Session = Depends(get_db)):
    return UserRepository(db).list_students()
