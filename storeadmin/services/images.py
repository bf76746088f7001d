from __future__ import annotations

import io
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from storeadmin.api import FilePart
from storeadmin.schema import ChildImage, parse_rows

logger = logging.getLogger(__name__)

REQUIRED_WIDTH = 726
REQUIRED_HEIGHT = 967
MAX_CHILD_IMAGES = 10

PRIMARY_SIZE_ERROR = f"Image must be exactly {REQUIRED_WIDTH} × {REQUIRED_HEIGHT} pixels."
MAX_CHILD_ERROR = "Maximum 10 images allowed"


class ImageRejected(ValueError):
    pass


@dataclass(frozen=True)
class UploadedImage:
    name: str
    data: bytes
    content_type: str = "application/octet-stream"

    @classmethod
    def from_upload(cls, uploaded: Any) -> "UploadedImage":
        # Works with streamlit's UploadedFile (name, type, getvalue()).
        return cls(
            name=str(uploaded.name),
            data=bytes(uploaded.getvalue()),
            content_type=str(getattr(uploaded, "type", None) or "application/octet-stream"),
        )

    def as_part(self, field_name: str) -> FilePart:
        return (field_name, (self.name, self.data, self.content_type))


def read_dimensions(data: bytes) -> tuple[int, int]:
    try:
        with Image.open(io.BytesIO(data)) as img:
            return img.size
    except (UnidentifiedImageError, OSError) as e:
        raise ImageRejected("File could not be read as an image.") from e


class PreviewStore:
    """
    Local preview handles for not-yet-uploaded files.

    Every handle handed out must be released when its file is replaced,
    removed, or the form is closed; ``len(store)`` is the number still alive.
    """

    def __init__(self) -> None:
        self._items: dict[str, bytes] = {}

    def create(self, data: bytes) -> str:
        handle = uuid.uuid4().hex
        self._items[handle] = data
        return handle

    def get(self, handle: str) -> Optional[bytes]:
        return self._items.get(handle)

    def release(self, handle: Optional[str]) -> None:
        if handle is not None:
            self._items.pop(handle, None)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, handle: object) -> bool:
        return handle in self._items


@dataclass
class ChildSlot:
    upload: UploadedImage
    preview: str


@dataclass
class ImageAttachments:
    previews: PreviewStore = field(default_factory=PreviewStore)
    validate_dimensions: bool = True

    primary: Optional[UploadedImage] = None
    primary_preview: Optional[str] = None
    primary_error: str = ""

    children: list[ChildSlot] = field(default_factory=list)
    child_errors: list[str] = field(default_factory=list)
    existing: list[ChildImage] = field(default_factory=list)

    @property
    def child_count(self) -> int:
        return len(self.children) + len(self.existing)

    def _check_size(self, upload: UploadedImage, message: str) -> None:
        if not self.validate_dimensions:
            return
        width, height = read_dimensions(upload.data)
        if (width, height) != (REQUIRED_WIDTH, REQUIRED_HEIGHT):
            logger.info("rejected %s: %sx%s", upload.name, width, height)
            raise ImageRejected(message)

    # ---- primary slot ----

    def set_primary(self, upload: UploadedImage) -> None:
        try:
            self._check_size(upload, PRIMARY_SIZE_ERROR)
        except ImageRejected as e:
            # previously accepted file stays in place
            self.primary_error = str(e)
            raise

        self.previews.release(self.primary_preview)
        self.primary = upload
        self.primary_preview = self.previews.create(upload.data)
        self.primary_error = ""

    def remove_primary(self) -> None:
        self.previews.release(self.primary_preview)
        self.primary = None
        self.primary_preview = None
        self.primary_error = ""

    # ---- child slots ----

    def add_child(self, upload: UploadedImage) -> None:
        if self.child_count >= MAX_CHILD_IMAGES:
            raise ImageRejected(MAX_CHILD_ERROR)
        self._check_size(upload, f'"{upload.name}" must be exactly {REQUIRED_WIDTH} × {REQUIRED_HEIGHT} pixels.')
        self.children.append(ChildSlot(upload=upload, preview=self.previews.create(upload.data)))

    def add_children(self, uploads: list[UploadedImage]) -> list[str]:
        """Add a multi-file selection; returns one message per rejected file."""
        if self.child_count + len(uploads) > MAX_CHILD_IMAGES:
            self.child_errors = [MAX_CHILD_ERROR]
            return list(self.child_errors)

        errors: list[str] = []
        for upload in uploads:
            try:
                self.add_child(upload)
            except ImageRejected as e:
                errors.append(str(e))
        self.child_errors = errors
        return errors

    def remove_child(self, index: int) -> None:
        slot = self.children.pop(index)
        self.previews.release(slot.preview)

    def load_existing(self, api, variant_id: int) -> None:
        rows = api.get_list(f"product-variant-images/{int(variant_id)}")
        self.existing = parse_rows(ChildImage, rows)

    def delete_existing_child(self, api, child_id: int) -> None:
        # Raises ApiError on failure, leaving ``existing`` untouched.
        api.delete(f"product-variant-images/{int(child_id)}")
        self.existing = [img for img in self.existing if img.id != int(child_id)]

    # ---- upload helpers ----

    def primary_parts(self, field_name: str) -> list[FilePart]:
        return [self.primary.as_part(field_name)] if self.primary is not None else []

    def child_parts(self, field_name: str = "childImages") -> list[FilePart]:
        return [slot.upload.as_part(field_name) for slot in self.children]

    def reset(self) -> None:
        self.remove_primary()
        for slot in self.children:
            self.previews.release(slot.preview)
        self.children = []
        self.child_errors = []
        self.existing = []
