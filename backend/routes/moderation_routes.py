from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from backend.auth.dependencies import Caller, admin_only, is_author_or_moderator
from backend.database import get_db
from backend.repositories.posts import PostRepository
from backend.schemas import MessageResponse, PostResponse

router = APIRouter(tags=['moderation'])


@router.get('', response_model=list[PostResponse])
def list_all_posts(caller: Caller = Depends(admin_only), db: Session = Depends(get_db)):
    return PostRepository(db).list_recent()


@router.delete('', response_model=MessageResponse)
def remove_post(
    post_id: int = Query(..., alias='id'),
    caller: Caller = Depends(admin_only),
    db: Session = Depends(get_db),
):
    PostRepository(db).delete_owned(post_id, caller, is_author_or_moderator)
    return MessageResponse(message='Post deleted successfully')
