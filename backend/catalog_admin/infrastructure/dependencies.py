"""FastAPI dependency injection: wires infrastructure to the application layer."""

from functools import lru_cache

import httpx
from fastapi import Depends, Header

from catalog_admin.config import get_settings
from catalog_admin.application.interfaces import AssetUploader, DocumentStore
from catalog_admin.application.services import (
    EntityManagerWorkflow,
    FeaturedFlagService,
    ScreenRegistry,
)
from catalog_admin.domain.definitions import get_definition
from catalog_admin.domain.entities import Collection, ScreenState
from catalog_admin.infrastructure.cloudinary import CloudinaryAssetUploader
from catalog_admin.infrastructure.database.repositories import SQLAlchemyDocumentStore
from catalog_admin.infrastructure.database.session import async_session_factory

DEFAULT_CONSOLE_SESSION = "default"


@lru_cache
def get_screen_registry() -> ScreenRegistry:
    """Process-wide registry of operator screen states."""
    return ScreenRegistry()


@lru_cache
def get_upload_http_client() -> httpx.AsyncClient:
    """Shared HTTP client for Cloudinary uploads; closed on application shutdown."""
    settings = get_settings()
    return httpx.AsyncClient(timeout=settings.upload_timeout_seconds)


def get_document_store() -> DocumentStore:
    """Provides the document store; each call on it commits independently."""
    return SQLAlchemyDocumentStore(async_session_factory)


def get_asset_uploader() -> AssetUploader:
    """Provides the Cloudinary uploader configured once from Settings."""
    settings = get_settings()
    return CloudinaryAssetUploader(
        cloud_name=settings.cloudinary_cloud_name,
        upload_preset=settings.cloudinary_upload_preset,
        api_key=settings.cloudinary_api_key,
        base_url=settings.cloudinary_base_url,
        max_upload_bytes=settings.max_upload_bytes,
        timeout=settings.upload_timeout_seconds,
        http_client=get_upload_http_client(),
    )


def get_console_session(
    x_console_session: str = Header(DEFAULT_CONSOLE_SESSION, alias="X-Console-Session"),
) -> str:
    """Operator session id; every session gets its own screen states."""
    return x_console_session.strip() or DEFAULT_CONSOLE_SESSION


def get_screen_state(
    collection: Collection,
    session_id: str = Depends(get_console_session),
    registry: ScreenRegistry = Depends(get_screen_registry),
) -> ScreenState:
    return registry.get(session_id, collection)


def get_entity_manager(
    collection: Collection,
    store: DocumentStore = Depends(get_document_store),
    uploader: AssetUploader = Depends(get_asset_uploader),
) -> EntityManagerWorkflow:
    """Provides the workflow bound to the collection named in the path."""
    return EntityManagerWorkflow(get_definition(collection), store, uploader)


def get_featured_flag_service(
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    store: DocumentStore = Depends(get_document_store),
) -> FeaturedFlagService:
    settings = get_settings()
    return FeaturedFlagService(workflow, store, best_seller_limit=settings.best_seller_limit)
