"""Create / update / delete submit handlers that resynchronize the owning view."""

from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from stocksync.auth.session import Session
from stocksync.errors import Failure, FailureKind, validation_error
from stocksync.utils.logger import get_logger
from stocksync.views.notifications import Notifier
from stocksync.views.resources import OPERATION_METHODS, Operation, Resource
from stocksync.views.state import DataView

logger = get_logger("stocksync.views.mutations")

_VERBS = {
    Operation.CREATE: ("create", "created"),
    Operation.UPDATE: ("update", "updated"),
    Operation.DELETE: ("delete", "deleted"),
    Operation.ADD_STOCK: ("add stock for", "added"),
}

# Failures whose own message already tells the user what to do
_SELF_EXPLANATORY = {FailureKind.AUTH_EXPIRED, FailureKind.NO_CREDENTIAL, FailureKind.NETWORK_ERROR}


class MutationOutcome(BaseModel):
    ok: bool
    failure: Optional[Failure] = None
    payload: Any = None


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in err.get("loc", ())) or "input"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


class MutationFlow:
    """Dialog/form state for one resource plus the submit path.

    Success closes the dialog and triggers a full refetch of ``view``. Failure keeps the
    dialog open and never touches the view's state.
    """

    def __init__(
        self,
        session: Session,
        resource: Resource,
        view: DataView,
        notifier: Notifier | None = None,
    ):
        self.session = session
        self.resource = resource
        self.view = view
        self.notifier = notifier or view.notifier
        self.selected: Any = None
        self.dialog_open = False
        self.loading = False

    def open_create(self) -> None:
        self.selected = None
        self.dialog_open = True

    def open_edit(self, entity: Any) -> None:
        self.selected = entity
        self.dialog_open = True

    def open_delete(self, entity: Any) -> None:
        self.selected = entity
        self.dialog_open = True

    def cancel(self) -> None:
        self.dialog_open = False

    def _build_body(self, operation: Operation, payload: Any) -> dict[str, Any] | None:
        """Validate the form payload. Raises ValidationError on rejection."""
        model = self.resource.model_for(operation)
        if model is None:
            return None
        values = model.model_validate(payload or {}).model_dump(mode="json", exclude_none=True)
        if operation is Operation.UPDATE:
            return {self.resource.id_field: self.resource.entity_id(self.selected), **values}
        return values

    async def submit(self, operation: Operation, payload: Any = None) -> MutationOutcome:
        """Send one mutation; on success close the dialog and refetch the view."""
        resource = self.resource
        verb, past = _VERBS[operation]
        log = logger.bind(resource=resource.name, operation=operation.value)
        if not resource.supports(operation):
            raise ValueError(f"Resource {resource.name!r} does not support {operation.value!r}")
        if operation is not Operation.CREATE and self.selected is None:
            log.warning("mutation.rejected.no_selection")
            return MutationOutcome(ok=False, failure=validation_error(f"No {resource.label} selected."))
        try:
            body = self._build_body(operation, payload)
        except ValidationError as e:
            log.info("mutation.rejected.validation", errors=len(e.errors()))
            return MutationOutcome(ok=False, failure=validation_error(_format_validation_error(e)))

        path = resource.path_for(operation, self.selected)
        self.loading = True
        try:
            result = await self.session.request(OPERATION_METHODS[operation], path, body=body)
        finally:
            self.loading = False

        if isinstance(result, Failure):
            log.warning("mutation.failed", path=path, kind=result.kind.value)
            if result.kind in _SELF_EXPLANATORY:
                description = result.message
            else:
                description = f"Could not {verb} {resource.label}. {result.message}"
            self.notifier.error("Error", description)
            return MutationOutcome(ok=False, failure=result)

        log.info("mutation.ok", path=path)
        if operation is Operation.ADD_STOCK:
            description = f"Stock successfully {past}."
        else:
            description = f"{resource.label.capitalize()} successfully {past}."
        self.notifier.success("Success", description)
        self.dialog_open = False
        self.selected = None
        await self.view.refresh()
        return MutationOutcome(ok=True, payload=result.payload)
