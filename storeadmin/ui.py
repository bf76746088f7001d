from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, TypeVar

import pandas as pd
import streamlit as st

from storeadmin.api import ApiClient, ApiError, get_client
from storeadmin.config import Settings, get_settings
from storeadmin.services.forms import DeleteConfirmation, SubmitResult
from storeadmin.services.images import PreviewStore, UploadedImage

logger = logging.getLogger(__name__)

T = TypeVar("T")


def page_header(title: str, icon: str, caption: str) -> tuple[Settings, ApiClient]:
    st.set_page_config(page_title=title, page_icon=icon, layout="wide")
    st.title(f"{icon} {title}")
    st.caption(caption)
    for message, flash_icon in st.session_state.pop("flash", []):
        st.toast(message, icon=flash_icon)
    settings = get_settings()
    return settings, get_client(settings.api_base_url)


def state(key: str, factory: Callable[[], T]) -> T:
    # Per-page objects survive reruns in session state.
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def previews() -> PreviewStore:
    return state("preview_store", PreviewStore)


def fetch(load: Callable[[], list[T]], what: str) -> list[T]:
    try:
        return load()
    except ApiError as e:
        logger.warning("loading %s failed: %s", what, e)
        st.toast(f"Failed to fetch {what}", icon="❌")
        return []


def notify(result: SubmitResult) -> None:
    # Shown by page_header on the rerun that follows.
    flash = st.session_state.setdefault("flash", [])
    flash.append((result.message, "✅" if result.ok else "❌"))


def field_error(errors: dict, key: str) -> None:
    if errors.get(key):
        st.caption(f":red[{errors[key]}]")


def table(rows: list[dict], empty: str, image_columns: Iterable[str] = ()) -> None:
    if not rows:
        st.info(empty)
        return
    st.dataframe(
        pd.DataFrame(rows),
        use_container_width=True,
        hide_index=True,
        column_config={c: st.column_config.ImageColumn(c, width="small") for c in image_columns},
    )


def pick(label: str, items: list[T], fmt: Callable[[T], str], key: str) -> Optional[T]:
    if not items:
        return None
    return st.selectbox(label, options=items, format_func=fmt, key=key)


def uploaded(file: Any) -> Optional[UploadedImage]:
    return UploadedImage.from_upload(file) if file is not None else None


def uploader_key(name: str) -> str:
    # Bumping the nonce gives the widget a fresh key, clearing its selection.
    return f"{name}_{st.session_state.get(f'{name}_nonce', 0)}"


def reset_uploader(name: str) -> None:
    st.session_state[f"{name}_nonce"] = st.session_state.get(f"{name}_nonce", 0) + 1


def confirm_delete(confirmation: DeleteConfirmation, delete: Callable[[int], Any]) -> None:
    if not confirmation.is_pending:
        return
    with st.container(border=True):
        st.warning(f"Are you sure? This will permanently delete the {confirmation.entity} **{confirmation.label}**.")
        c1, c2 = st.columns(2)
        if c1.button("Yes, delete it!", type="primary", key=f"confirm_delete_{confirmation.entity}"):
            notify(confirmation.confirm(delete))
            st.rerun()
        if c2.button("Cancel", key=f"cancel_delete_{confirmation.entity}"):
            confirmation.cancel()
            st.rerun()
