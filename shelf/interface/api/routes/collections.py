"""Collection routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel

from shelf.application.usecase.collection import (
    AddCollectionMediaUseCase,
    CollectionItem,
    CollectionMediaRequest,
    CreateCollectionRequest,
    CreateCollectionUseCase,
    DeleteCollectionRequest,
    DeleteCollectionUseCase,
    GetCollectionRequest,
    GetCollectionUseCase,
    ListCollectionsRequest,
    ListCollectionsResponse,
    ListCollectionsUseCase,
    RemoveCollectionMediaUseCase,
    UpdateCollectionRequest,
    UpdateCollectionUseCase,
)
from shelf.domain.service import JWTService

router = APIRouter(prefix="/collections", tags=["collections"], route_class=DishkaRoute)


class CollectionAPIRequest(BaseModel):
    """Create or update a collection."""

    name: str | None = None
    description: str | None = None


class AddMediaAPIRequest(BaseModel):
    """Add media to a collection."""

    media_id: UUID


@router.get("", response_model=ListCollectionsResponse)
async def list_collections(
    list_collections_use_case: FromDishka[ListCollectionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListCollectionsResponse:
    """List the caller's collections ordered by name."""
    user_id = jwt_service.require_user_id(auth_token)
    return await list_collections_use_case.execute(
        ListCollectionsRequest(user_id=str(user_id))
    )


@router.post("", response_model=CollectionItem, status_code=status.HTTP_201_CREATED)
async def create_collection(
    request: CollectionAPIRequest,
    create_collection_use_case: FromDishka[CreateCollectionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CollectionItem:
    """Create a collection."""
    user_id = jwt_service.require_user_id(auth_token)
    return await create_collection_use_case.execute(
        CreateCollectionRequest(
            user_id=str(user_id), name=request.name, description=request.description
        )
    )


@router.get("/{collection_id}", response_model=CollectionItem)
async def get_collection(
    collection_id: UUID,
    get_collection_use_case: FromDishka[GetCollectionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CollectionItem:
    """Get one of the caller's collections with its active media."""
    user_id = jwt_service.require_user_id(auth_token)
    return await get_collection_use_case.execute(
        GetCollectionRequest(collection_id=str(collection_id), user_id=str(user_id))
    )


@router.put("/{collection_id}", response_model=CollectionItem)
async def update_collection(
    collection_id: UUID,
    request: CollectionAPIRequest,
    update_collection_use_case: FromDishka[UpdateCollectionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CollectionItem:
    """Rename or re-describe a collection."""
    user_id = jwt_service.require_user_id(auth_token)
    return await update_collection_use_case.execute(
        UpdateCollectionRequest(
            collection_id=str(collection_id),
            user_id=str(user_id),
            name=request.name,
            description=request.description,
        )
    )


@router.delete("/{collection_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_collection(
    collection_id: UUID,
    delete_collection_use_case: FromDishka[DeleteCollectionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Delete a collection. Its media is untouched."""
    user_id = jwt_service.require_user_id(auth_token)
    await delete_collection_use_case.execute(
        DeleteCollectionRequest(collection_id=str(collection_id), user_id=str(user_id))
    )


@router.post("/{collection_id}/media", response_model=CollectionItem)
async def add_collection_media(
    collection_id: UUID,
    request: AddMediaAPIRequest,
    add_collection_media_use_case: FromDishka[AddCollectionMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CollectionItem:
    """Add active media to a collection. Adding twice is a no-op."""
    user_id = jwt_service.require_user_id(auth_token)
    return await add_collection_media_use_case.execute(
        CollectionMediaRequest(
            collection_id=str(collection_id),
            user_id=str(user_id),
            media_id=str(request.media_id),
        )
    )


@router.delete(
    "/{collection_id}/media/{media_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def remove_collection_media(
    collection_id: UUID,
    media_id: UUID,
    remove_collection_media_use_case: FromDishka[RemoveCollectionMediaUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> None:
    """Remove media from a collection."""
    user_id = jwt_service.require_user_id(auth_token)
    await remove_collection_media_use_case.execute(
        CollectionMediaRequest(
            collection_id=str(collection_id),
            user_id=str(user_id),
            media_id=str(media_id),
        )
    )
