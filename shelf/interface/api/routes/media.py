"""Media routes.

Static paths (``/media/deleted``, ``/media/cleanup``) are declared before
``/media/{media_id}`` so they are not captured by the parameter.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from shelf.application.usecase.media import (
    DeleteMediaRequest,
    DeleteMediaResponse,
    DeleteMediaUseCase,
    GetMediaRequest,
    GetMediaUseCase,
    ListDeletedMediaRequest,
    ListDeletedMediaResponse,
    ListDeletedMediaUseCase,
    ListMediaRequest,
    ListMediaResponse,
    ListMediaUseCase,
    MediaItem,
    PurgeMediaRequest,
    PurgeMediaResponse,
    PurgeMediaUseCase,
    RestoreMediaRequest,
    RestoreMediaUseCase,
    UpdateMediaRequest,
    UpdateMediaUseCase,
    UploadMediaRequest,
    UploadMediaUseCase,
)
from shelf.domain.error import UnauthorizedError, ValidationError
from shelf.domain.service import JWTService
from shelf.domain.value import MediaChanges, MediaMetadata

router = APIRouter(prefix="/media", tags=["media"], route_class=DishkaRoute)


class UploadMediaAPIRequest(BaseModel):
    """Register an uploaded blob, as new media or as another format of ``media_id``."""

    blob_url: str
    content_type: str | None = None
    title: str | None = None
    author: str | None = None
    description: str | None = None
    language: str | None = None
    publication_date: str | None = None
    media_type: str | None = None
    tags: list[str] | str | None = None
    media_id: UUID | None = None


class UpdateMediaAPIRequest(BaseModel):
    """Fields an owner may edit. Omitted fields are left unchanged."""

    title: str | None = None
    author: str | None = None
    description: str | None = None
    language: str | None = None
    publication_date: str | None = None
    media_type: str | None = None
    tags: list[str] | str | None = None


def _optional_user_id(jwt_service: JWTService, auth_token: str | None) -> str | None:
    if not auth_token:
        return None
    try:
        return str(jwt_service.require_user_id(auth_token))
    except UnauthorizedError:
        return None


@router.get("", response_model=ListMediaResponse)
async def list_media(
    list_media_use_case: FromDishka[ListMediaUseCase],
    limit: int = Query(default=50, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListMediaResponse:
    """List active media, newest upload first."""
    return await list_media_use_case.execute(
        ListMediaRequest(limit=limit, offset=offset)
    )


@router.post("", response_model=MediaItem, status_code=status.HTTP_201_CREATED)
async def upload_media(
    request: UploadMediaAPIRequest,
    upload_media_use_case: FromDishka[UploadMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MediaItem:
    """Create media from an uploaded file, or attach a second format.

    Example:
        POST /media
        {
            "blob_url": "https://blob.example.com/dune.epub",
            "content_type": "application/epub+zip",
            "title": "Dune",
            "tags": "sci-fi, classics"
        }
    """
    user_id = jwt_service.require_user_id(auth_token)
    try:
        metadata = MediaMetadata.model_validate(
            request.model_dump(exclude={"blob_url", "content_type"}, exclude_none=True)
        )
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid media metadata: {e.errors()[0]['msg']}")

    return await upload_media_use_case.execute(
        UploadMediaRequest(
            user_id=str(user_id),
            blob_url=request.blob_url,
            content_type=request.content_type,
            metadata=metadata,
        )
    )


@router.get("/deleted", response_model=ListDeletedMediaResponse)
async def list_deleted_media(
    list_deleted_media_use_case: FromDishka[ListDeletedMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListDeletedMediaResponse:
    """List the caller's trash with days left before purge."""
    user_id = jwt_service.require_user_id(auth_token)
    return await list_deleted_media_use_case.execute(
        ListDeletedMediaRequest(user_id=str(user_id))
    )


@router.post("/cleanup", response_model=PurgeMediaResponse)
async def cleanup_media(
    purge_media_use_case: FromDishka[PurgeMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PurgeMediaResponse:
    """Purge everything whose retention window has passed."""
    user_id = jwt_service.require_user_id(auth_token)
    return await purge_media_use_case.execute(PurgeMediaRequest(user_id=str(user_id)))


@router.get("/{media_id}", response_model=MediaItem)
async def get_media(
    media_id: UUID,
    get_media_use_case: FromDishka[GetMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MediaItem:
    """Get media with its files and tags.

    Trashed media is only visible to its uploader.
    """
    return await get_media_use_case.execute(
        GetMediaRequest(
            media_id=str(media_id),
            user_id=_optional_user_id(jwt_service, auth_token),
        )
    )


@router.put("/{media_id}", response_model=MediaItem)
async def update_media(
    media_id: UUID,
    request: UpdateMediaAPIRequest,
    update_media_use_case: FromDishka[UpdateMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MediaItem:
    """Edit media metadata. Only the uploader may edit."""
    user_id = jwt_service.require_user_id(auth_token)
    try:
        changes = MediaChanges.model_validate(request.model_dump(exclude_unset=True))
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid media changes: {e.errors()[0]['msg']}")

    return await update_media_use_case.execute(
        UpdateMediaRequest(media_id=str(media_id), user_id=str(user_id), changes=changes)
    )


@router.delete("/{media_id}", response_model=DeleteMediaResponse)
async def delete_media(
    media_id: UUID,
    delete_media_use_case: FromDishka[DeleteMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteMediaResponse:
    """Move media to the trash."""
    user_id = jwt_service.require_user_id(auth_token)
    return await delete_media_use_case.execute(
        DeleteMediaRequest(media_id=str(media_id), user_id=str(user_id))
    )


@router.post("/{media_id}/restore", response_model=MediaItem)
async def restore_media(
    media_id: UUID,
    restore_media_use_case: FromDishka[RestoreMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> MediaItem:
    """Bring media back from the trash."""
    user_id = jwt_service.require_user_id(auth_token)
    return await restore_media_use_case.execute(
        RestoreMediaRequest(media_id=str(media_id), user_id=str(user_id))
    )
