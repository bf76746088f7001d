from __future__ import annotations

from typing import Any, Literal, Optional

from storeadmin.schema import Banner, parse_rows
from storeadmin.services.images import UploadedImage
from storeadmin.services.validation import raise_if_invalid, validate_banner
from storeadmin.utils import image_url

BannerKind = Literal["home", "collection"]

ENDPOINTS: dict[str, str] = {
    "home": "home-banners",
    "collection": "collection-banners",
}


def list_banners(api, kind: BannerKind) -> list[Banner]:
    return parse_rows(Banner, api.get_list(ENDPOINTS[kind]))


def save_banner(
    api,
    kind: BannerKind,
    values: dict,
    *,
    banner_id: Optional[int] = None,
    image: Optional[UploadedImage] = None,
) -> Any:
    raise_if_invalid(validate_banner(values, has_image=image is not None, editing=banner_id is not None))
    data = {"title": str(values["title"]).strip()}
    files = [image.as_part("bannerImage")] if image is not None else None
    if banner_id is None:
        return api.post(ENDPOINTS[kind], data=data, files=files)
    return api.put(f"{ENDPOINTS[kind]}/{int(banner_id)}", data=data, files=files)


def delete_banner(api, kind: BannerKind, banner_id: int) -> Any:
    return api.delete(f"{ENDPOINTS[kind]}/{int(banner_id)}")


def banner_rows(banners: list[Banner], uploads_base_url: str) -> list[dict]:
    return [
        {"S.No": i + 1, "Title": b.title, "Banner Image": image_url(b.image, uploads_base_url)}
        for i, b in enumerate(banners)
    ]
