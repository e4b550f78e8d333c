"""Modal CRUD flow.

States:

    IDLE → FORM_OPEN (create | edit) → SUBMITTING → IDLE
    IDLE → DELETE_CONFIRM → DELETING → IDLE

SUBMITTING/DELETING return to IDLE only on success. On failure the flow
goes back to the open modal so the user can retry or cancel; the mutation
hook has already shown the error toast.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, Literal, Mapping, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from lms_dashboard.query.client import Mutation
from lms_dashboard.query.toast import Toaster

logger = structlog.get_logger(__name__)

R = TypeVar("R")

FormMode = Literal["create", "edit"]


class CrudState(str, Enum):
    IDLE = "idle"
    FORM_OPEN = "form_open"
    SUBMITTING = "submitting"
    DELETE_CONFIRM = "delete_confirm"
    DELETING = "deleting"


class CrudError(Exception):
    """Error in a CRUD flow."""

    pass


class CrudStateError(CrudError):
    """Action not allowed in the current state."""

    def __init__(self, action: str, state: CrudState):
        self.action = action
        self.state = state
        super().__init__(f"Cannot {action} while {state.value}")


class FormValidationError(CrudError):
    """Form values failed client-side validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


def format_validation_errors(error: ValidationError) -> list[str]:
    """One "field: message" line per pydantic error."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "Invalid value")
        lines.append(f"{loc}: {message}" if loc else message)
    return lines


def record_api_id(record: Any) -> str:
    return record.api_id


class CrudFlow(Generic[R]):
    """Create/edit/delete flow for one entity list.

    Args:
        toaster: Where validation errors are reported
        create: Create mutation (None if the entity cannot be created here)
        update: Update mutation
        delete: Delete mutation, called with `delete_id(record)`
        create_schema: Request model validating create form values
        update_schema: Request model validating edit form values; the
            record's `update_id` is injected as `id`
        delete_id: Extracts the server id to delete from a record
        update_id: Extracts the server id injected into edit form values
    """

    def __init__(
        self,
        toaster: Toaster,
        create: Mutation | None = None,
        update: Mutation | None = None,
        delete: Mutation | None = None,
        create_schema: type[BaseModel] | None = None,
        update_schema: type[BaseModel] | None = None,
        delete_id: Callable[[R], Any] = record_api_id,
        update_id: Callable[[R], Any] = record_api_id,
    ):
        self.toaster = toaster
        self._create = create
        self._update = update
        self._delete = delete
        self._create_schema = create_schema
        self._update_schema = update_schema
        self._delete_id = delete_id
        self._update_id = update_id

        self.state = CrudState.IDLE
        self.mode: FormMode | None = None
        self.record: R | None = None

    def _require(self, action: str, *states: CrudState) -> None:
        if self.state not in states:
            raise CrudStateError(action, self.state)

    def _reset(self) -> None:
        self.state = CrudState.IDLE
        self.mode = None
        self.record = None

    @property
    def is_open(self) -> bool:
        return self.state is not CrudState.IDLE

    @property
    def is_busy(self) -> bool:
        return self.state in (CrudState.SUBMITTING, CrudState.DELETING)

    # -------------------------------------------------------------------------
    # Create / edit
    # -------------------------------------------------------------------------

    def open_create(self) -> None:
        self._require("open create form", CrudState.IDLE)
        if self._create is None:
            raise CrudError("This list does not support creating records")
        self.state = CrudState.FORM_OPEN
        self.mode = "create"
        self.record = None

    def open_edit(self, record: R) -> None:
        self._require("open edit form", CrudState.IDLE)
        if self._update is None:
            raise CrudError("This list does not support editing records")
        if not self._update_id(record):
            raise CrudError("This record has nothing to edit")
        self.state = CrudState.FORM_OPEN
        self.mode = "edit"
        self.record = record

    def _validate(self, values: Mapping[str, Any]) -> BaseModel:
        if self.mode == "edit":
            schema = self._update_schema
            payload = {**values, "id": self._update_id(self.record)}
        else:
            schema = self._create_schema
            payload = dict(values)

        if schema is None:
            raise CrudError(f"No form schema for {self.mode}")

        try:
            return schema.model_validate(payload)
        except ValidationError as e:
            errors = format_validation_errors(e)
            self.toaster.error("; ".join(errors), title="Validation Error")
            raise FormValidationError(errors) from e

    async def submit(self, values: Mapping[str, Any]) -> Any:
        """Validate form values and run the create/update mutation.

        Raises:
            FormValidationError: Values are invalid; the form stays open
            Exception: Whatever the mutation raised; the form stays open
        """
        self._require("submit", CrudState.FORM_OPEN)
        variables = self._validate(values)
        mutation = self._update if self.mode == "edit" else self._create

        self.state = CrudState.SUBMITTING
        try:
            data = await mutation.mutate_async(variables)  # type: ignore[union-attr]
        except Exception:
            self.state = CrudState.FORM_OPEN
            raise

        logger.info("crud_submitted", mode=self.mode, mutation=mutation.name)  # type: ignore[union-attr]
        self._reset()
        return data

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def request_delete(self, record: R) -> None:
        self._require("request delete", CrudState.IDLE)
        if self._delete is None:
            raise CrudError("This list does not support deleting records")
        if not self._delete_id(record):
            raise CrudError("This record has nothing to delete")
        self.state = CrudState.DELETE_CONFIRM
        self.record = record

    async def confirm_delete(self) -> Any:
        """Run the delete mutation for the record awaiting confirmation."""
        self._require("confirm delete", CrudState.DELETE_CONFIRM)
        target = self._delete_id(self.record)  # type: ignore[arg-type]

        self.state = CrudState.DELETING
        try:
            data = await self._delete.mutate_async(target)  # type: ignore[union-attr]
        except Exception:
            self.state = CrudState.DELETE_CONFIRM
            raise

        logger.info("crud_deleted", target=target)
        self._reset()
        return data

    def cancel(self) -> None:
        """Close the open modal without issuing a request."""
        if self.is_busy:
            raise CrudStateError("cancel", self.state)
        self._reset()


# =============================================================================
# TOGGLE STATUS
# =============================================================================


async def toggle_status(
    mutation: Mutation,
    record: R,
    build_variables: Callable[[R], BaseModel],
) -> Any:
    """Flip a record's status through its update mutation (no modal)."""
    variables = build_variables(record)
    logger.info("toggle_status", mutation=mutation.name, target=record_api_id(record))
    return await mutation.mutate_async(variables)
