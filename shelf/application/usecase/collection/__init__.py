"""Collection use cases."""

from .common import CollectionItem
from .create_collection import CreateCollectionRequest, CreateCollectionUseCase
from .delete_collection import DeleteCollectionRequest, DeleteCollectionUseCase
from .get_collection import GetCollectionRequest, GetCollectionUseCase
from .list_collections import (
    ListCollectionsRequest,
    ListCollectionsResponse,
    ListCollectionsUseCase,
)
from .manage_collection_media import (
    AddCollectionMediaUseCase,
    CollectionMediaRequest,
    RemoveCollectionMediaUseCase,
)
from .update_collection import UpdateCollectionRequest, UpdateCollectionUseCase

__all__ = [
    "AddCollectionMediaUseCase",
    "CollectionItem",
    "CollectionMediaRequest",
    "CreateCollectionRequest",
    "CreateCollectionUseCase",
    "DeleteCollectionRequest",
    "DeleteCollectionUseCase",
    "GetCollectionRequest",
    "GetCollectionUseCase",
    "ListCollectionsRequest",
    "ListCollectionsResponse",
    "ListCollectionsUseCase",
    "RemoveCollectionMediaUseCase",
    "UpdateCollectionRequest",
    "UpdateCollectionUseCase",
]
