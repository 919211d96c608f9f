from fastapi import APIRouter, Depends, HTTPException
from typing import List, Literal, Optional
from ..services import PostService
from ..services.post_service import to_post_public
from ..schemas import PostCreate, PostUpdate, PostPublic, PinUpdate
from ..models import User
from ..security import get_current_user, get_optional_user

router = APIRouter(tags=["Post"])

@router.post("", response_model=PostPublic, status_code=201)
async def create_post(
    post_data: PostCreate,
    current_user: User = Depends(get_current_user)
):
    """Tạo bài đăng mới trên bảng tin. Yêu cầu xác thực người dùng."""
    try:
        new_post = await PostService.create_post(
            author=current_user,
            board_slug=post_data.boardSlug,
            title=post_data.title,
            content=post_data.content
        )
        return to_post_public(new_post, str(current_user.id))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.get("", response_model=List[PostPublic])
async def list_posts(
    board: Optional[str] = None,
    sort: Literal["latest", "popular"] = "latest",
    skip: int = 0,
    limit: int = 20,
    current_user: Optional[User] = Depends(get_optional_user)
):
    """Danh sách bài đăng, lọc theo bảng tin."""
    posts = await PostService.list_posts(board_slug=board, skip=skip, limit=limit, sort=sort)
    viewer_id = str(current_user.id) if current_user else None
    return [to_post_public(post, viewer_id) for post in posts]

@router.get("/{post_id}", response_model=PostPublic)
async def get_post(
    post_id: str,
    current_user: Optional[User] = Depends(get_optional_user)
):
    try:
        post = await PostService.get_post(post_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return to_post_public(post, str(current_user.id) if current_user else None)

@router.post("/{post_id}/like", response_model=PostPublic)
async def toggle_like(
    post_id: str,
    current_user: User = Depends(get_current_user)
):
    """Thích hoặc bỏ thích bài đăng."""
    try:
        post = await PostService.toggle_like(post_id, str(current_user.id))
        return to_post_public(post, str(current_user.id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

@router.put("/{post_id}", response_model=PostPublic)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_user: User = Depends(get_current_user)
):
    """Cập nhật bài đăng. Chỉ tác giả mới có quyền chỉnh sửa."""
    try:
        post = await PostService.update_post(post_id, str(current_user.id), post_data.title, post_data.content)
        return to_post_public(post, str(current_user.id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.put("/{post_id}/pin", response_model=PostPublic)
async def set_pinned(
    post_id: str,
    pin_data: PinUpdate,
    current_user: User = Depends(get_current_user)
):
    """Ghim / bỏ ghim bài đăng (quản trị viên)."""
    try:
        post = await PostService.set_pinned(post_id, current_user, pin_data.isPinned)
        return to_post_public(post, str(current_user.id))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

@router.delete("/{post_id}", status_code=200)
async def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_user)
):
    """Xóa bài đăng. Tác giả hoặc quản trị viên."""
    try:
        return await PostService.delete_post(post_id, current_user)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
