from fastapi import APIRouter, Depends, HTTPException
from typing import List
from ..services import CommentService
from ..services.comment_service import to_comment_public
from ..schemas import CommentPublic, CommentNodePublic, CommentCreate, CommentUpdate
from ..models import User
from ..security import get_current_user

router = APIRouter(tags=["Comment"])

@router.post("/posts/{post_id}/comments", response_model=CommentPublic, status_code=201)
async def create_comment(
    post_id: str,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user)
):
    """Tạo bình luận mới hoặc trả lời một bình luận (parentId)."""
    try:
        new_comment = await CommentService.create_comment(
            post_id=post_id,
            author_id=str(current_user.id),
            content=comment_data.content,
            parent_id=comment_data.parentId
        )
        return to_comment_public(new_comment)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.get("/posts/{post_id}/comments", response_model=List[CommentNodePublic])
async def get_comments(post_id: str):
    """Lấy bình luận của bài đăng dưới dạng cây trả lời."""
    return await CommentService.get_comments(post_id)

@router.get("/posts/{post_id}/comments/count")
async def get_comment_count(post_id: str):
    """Lấy tổng số bình luận của một bài đăng."""
    count = await CommentService.get_comment_count(post_id)
    return {"count": count}

@router.delete("/comments/{comment_id}", status_code=200)
async def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_user)
):
    """Xóa bình luận và các trả lời. Tác giả bình luận, tác giả bài đăng hoặc quản trị viên."""
    try:
        return await CommentService.delete_comment(comment_id=comment_id, user=current_user)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.put("/comments/{comment_id}", response_model=CommentPublic)
async def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    current_user: User = Depends(get_current_user)
):
    """Cập nhật bình luận. Chỉ tác giả bình luận mới có quyền chỉnh sửa."""
    try:
        updated_comment = await CommentService.update_comment(
            comment_id=comment_id,
            user_id=str(current_user.id),
            content=comment_data.content
        )
        return to_comment_public(updated_comment)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
