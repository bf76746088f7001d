from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from storeadmin.api import ApiError
from storeadmin.services.validation import FormErrors, FormValidationError

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    ok: bool
    message: str = ""
    data: Any = None


@dataclass
class ModalForm:
    """
    Create/edit modal state.

    ``submit`` validates first and never touches the network while there are
    field errors. A failed request keeps the modal open with values intact;
    a successful one resets the form so the page can re-fetch its list.
    """

    entity: str
    is_open: bool = False
    editing_id: Optional[int] = None
    values: dict[str, Any] = field(default_factory=dict)
    errors: FormErrors = field(default_factory=dict)

    def open_create(self, defaults: Optional[dict] = None) -> None:
        self.is_open = True
        self.editing_id = None
        self.values = dict(defaults or {})
        self.errors = {}

    def open_edit(self, entity_id: int, values: dict) -> None:
        self.is_open = True
        self.editing_id = int(entity_id)
        self.values = dict(values)
        self.errors = {}

    def close(self) -> None:
        self.is_open = False
        self.editing_id = None
        self.values = {}
        self.errors = {}

    def submit(
        self,
        validate: Callable[[dict], FormErrors],
        create: Callable[[dict], Any],
        update: Callable[[int, dict], Any],
    ) -> SubmitResult:
        self.errors = validate(self.values)
        if self.errors:
            return SubmitResult(ok=False, message="Please fix the highlighted fields.")

        editing = self.editing_id is not None
        try:
            data = update(self.editing_id, self.values) if editing else create(self.values)
        except FormValidationError as e:
            self.errors = e.errors
            return SubmitResult(ok=False, message=str(e))
        except ApiError as e:
            logger.warning("saving %s failed: %s", self.entity, e)
            return SubmitResult(ok=False, message=f"Failed to save {self.entity}")

        self.close()
        verb = "updated" if editing else "created"
        return SubmitResult(ok=True, message=f"{self.entity.capitalize()} {verb} successfully!", data=data)


@dataclass
class DeleteConfirmation:
    """Nothing is deleted until ``confirm`` is called for a pending request."""

    entity: str
    pending_id: Optional[int] = None
    label: str = ""

    @property
    def is_pending(self) -> bool:
        return self.pending_id is not None

    def request(self, entity_id: int, label: str = "") -> None:
        self.pending_id = int(entity_id)
        self.label = label

    def cancel(self) -> None:
        self.pending_id = None
        self.label = ""

    def confirm(self, delete: Callable[[int], Any]) -> SubmitResult:
        if self.pending_id is None:
            return SubmitResult(ok=False, message="Nothing to delete.")
        entity_id = self.pending_id
        try:
            delete(entity_id)
        except ApiError as e:
            logger.warning("deleting %s %s failed: %s", self.entity, entity_id, e)
            self.cancel()
            return SubmitResult(ok=False, message=f"Failed to delete {self.entity}: {e}")
        self.cancel()
        return SubmitResult(ok=True, message=f"{self.entity.capitalize()} deleted successfully!")
