"""Catalog screen endpoints: list view, edit form, delete and featured toggles.

Every mutating call returns the refreshed screen view, including the
notifications queued by the operation.
"""

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from catalog_admin.application.schemas import (
    FeaturedViewSchema,
    FlagToggleRequest,
    FormView,
    NotificationSchema,
    OpenFormRequest,
    RecordResponse,
    ScreenView,
    SelectedAssetSchema,
    SessionClosedResponse,
    SetFieldsRequest,
)
from catalog_admin.application.services import (
    EntityManagerWorkflow,
    FeaturedFlagService,
    ScreenRegistry,
)
from catalog_admin.domain.entities import ScreenState
from catalog_admin.domain.exceptions import (
    CatalogAdminError,
    ConfirmationRequiredError,
    EntityNotFoundError,
    FeaturedLimitError,
    FeatureNotSupportedError,
    FormNotOpenError,
    FormValidationError,
    InvalidAssetError,
    PermissionDeniedError,
    StoreRejectedError,
    StoreUnavailableError,
    SubmissionInProgressError,
    UploadRejectedError,
)
from catalog_admin.infrastructure.dependencies import (
    get_console_session,
    get_entity_manager,
    get_featured_flag_service,
    get_screen_registry,
    get_screen_state,
)

router = APIRouter(prefix="/screens", tags=["Screens"])

_STATUS_BY_ERROR: tuple[tuple[type[CatalogAdminError], int], ...] = (
    (FormValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidAssetError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (UploadRejectedError, status.HTTP_502_BAD_GATEWAY),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StoreRejectedError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND),
    (ConfirmationRequiredError, status.HTTP_409_CONFLICT),
    (SubmissionInProgressError, status.HTTP_409_CONFLICT),
    (FeaturedLimitError, status.HTTP_409_CONFLICT),
    (FormNotOpenError, status.HTTP_409_CONFLICT),
    (FeatureNotSupportedError, status.HTTP_400_BAD_REQUEST),
)


def _http_error(exc: CatalogAdminError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    if isinstance(exc, FormValidationError):
        detail: str | dict = {"message": str(exc), "fields": exc.fields}
    else:
        detail = str(exc)
    return HTTPException(status_code=status_code, detail=detail)


def _screen_view(workflow: EntityManagerWorkflow, state: ScreenState) -> ScreenView:
    """Snapshot a screen; queued notifications are handed out exactly once."""
    definition = workflow.definition
    form = None
    if state.form is not None:
        form = FormView(
            mode=state.form.mode,
            values=state.form.values,
            editing_id=state.form.editing_id,
            asset=(
                SelectedAssetSchema.model_validate(state.form.asset, from_attributes=True)
                if state.form.asset is not None
                else None
            ),
            discount=state.form.discount,
            errors=state.form.errors,
            submitting=state.form.submitting,
        )

    featured = None
    if definition.featured_flags:
        featured = FeaturedViewSchema.model_validate(
            workflow.featured(state), from_attributes=True
        )

    return ScreenView(
        collection=definition.collection.value,
        label=definition.label,
        status=state.status,
        records=[RecordResponse.model_validate(r, from_attributes=True) for r in state.records],
        form=form,
        featured=featured,
        notifications=[
            NotificationSchema.model_validate(n, from_attributes=True)
            for n in state.drain_notifications()
        ],
    )


@router.delete("", response_model=SessionClosedResponse)
async def close_session(
    session_id: str = Depends(get_console_session),
    registry: ScreenRegistry = Depends(get_screen_registry),
) -> SessionClosedResponse:
    """Drop every screen state of the calling session, open forms included."""
    discarded = registry.discard_session(session_id)
    return SessionClosedResponse(session=session_id, discarded=discarded)


@router.get("/{collection}", response_model=ScreenView)
async def get_screen(
    refresh: bool = Query(False, description="Refetch the list even if already loaded"),
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    """Mount a screen (loading it on first visit) and return its current view."""
    if refresh:
        await workflow.load(state)
    else:
        await workflow.mount(state)
    return _screen_view(workflow, state)


@router.post("/{collection}/form", response_model=ScreenView)
async def open_form(
    data: OpenFormRequest,
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    """Open the create form, or the edit form for ``record_id``."""
    try:
        if data.record_id:
            await workflow.open_edit(state, data.record_id)
        else:
            workflow.open_create(state)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.patch("/{collection}/form", response_model=ScreenView)
async def set_form_fields(
    data: SetFieldsRequest,
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        workflow.forms.set_fields(state, data.values)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.put("/{collection}/form/asset", response_model=ScreenView)
async def select_form_asset(
    file: UploadFile = File(...),
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    """Attach an image to the open form; it is uploaded on submit."""
    content = await file.read()
    try:
        workflow.forms.select_asset(
            state, content, file.filename or "upload", file.content_type or ""
        )
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.delete("/{collection}/form/asset", response_model=ScreenView)
async def clear_form_asset(
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        workflow.forms.clear_asset(state)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.delete("/{collection}/form", response_model=ScreenView)
async def close_form(
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        workflow.forms.close(state)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.post("/{collection}/form/submit", response_model=ScreenView)
async def submit_form(
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    """Validate, upload and write the open form, then refetch the list."""
    try:
        await workflow.submit(state)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.delete("/{collection}/records/{record_id}", response_model=ScreenView)
async def delete_record(
    record_id: str,
    confirm: bool = Query(False, description="Must be true to actually delete"),
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        await workflow.delete(state, record_id, confirmed=confirm)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.post("/{collection}/records/{record_id}/product-of-the-day", response_model=ScreenView)
async def toggle_product_of_the_day(
    record_id: str,
    data: FlagToggleRequest,
    flags: FeaturedFlagService = Depends(get_featured_flag_service),
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        await flags.set_product_of_the_day(state, record_id, data.enabled, confirmed=data.confirm)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)


@router.post("/{collection}/records/{record_id}/best-seller", response_model=ScreenView)
async def toggle_best_seller(
    record_id: str,
    data: FlagToggleRequest,
    flags: FeaturedFlagService = Depends(get_featured_flag_service),
    workflow: EntityManagerWorkflow = Depends(get_entity_manager),
    state: ScreenState = Depends(get_screen_state),
) -> ScreenView:
    try:
        await flags.set_best_seller(state, record_id, data.enabled, confirmed=data.confirm)
    except CatalogAdminError as e:
        raise _http_error(e)
    return _screen_view(workflow, state)
