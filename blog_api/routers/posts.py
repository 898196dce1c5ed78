from fastapi import APIRouter, Depends, Path, Query, Request, Response, status

from blog_api.dependencies import get_blog_service
from blog_api.errors import validation_problem
from blog_api.schemas import BlogIn, BlogOut
from blog_api.services.blog_service import AbstractBlogService

router = APIRouter(prefix="/api/posts", tags=["posts"])

_NOT_FOUND = {404: {"description": "Blog post not found (empty body)"}}
_BAD_REQUEST = {400: {"description": "Validation failed"}}

# Ids outside the 32-bit INTEGER primary key range are rejected as 400.
_ID_MIN = -(2**31)
_ID_MAX = 2**31 - 1


@router.get("", response_model=list[BlogOut])
async def list_posts(
    term: str | None = Query(None, description="Case-insensitive filter on title, content or category."),
    service: AbstractBlogService = Depends(get_blog_service),
):
    return await service.get_all(term)


@router.get("/{post_id}", response_model=BlogOut, responses=_NOT_FOUND)
async def get_post(
    post_id: int = Path(ge=_ID_MIN, le=_ID_MAX),
    service: AbstractBlogService = Depends(get_blog_service),
):
    blog = await service.get_by_id(post_id)
    if blog is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return blog


@router.post("", status_code=201, response_model=BlogOut, responses=_BAD_REQUEST)
async def create_post(
    data: BlogIn,
    request: Request,
    response: Response,
    service: AbstractBlogService = Depends(get_blog_service),
):
    blog = await service.create(data.to_entity())
    response.headers["Location"] = str(request.url_for("get_post", post_id=blog.id))
    return blog


@router.put("/{post_id}", response_model=BlogOut, responses={**_NOT_FOUND, **_BAD_REQUEST})
async def update_post(
    data: BlogIn,
    post_id: int = Path(ge=_ID_MIN, le=_ID_MAX),
    service: AbstractBlogService = Depends(get_blog_service),
):
    if data.id != post_id:
        return validation_problem({"id": [f"Body id {data.id} does not match path id {post_id}."]})

    blog = await service.update(data.to_entity(post_id))
    if blog is None:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return blog


@router.delete("/{post_id}", status_code=204, responses=_NOT_FOUND)
async def delete_post(
    post_id: int = Path(ge=_ID_MIN, le=_ID_MAX),
    service: AbstractBlogService = Depends(get_blog_service),
):
    deleted = await service.delete(post_id)
    if not deleted:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
