from __future__ import annotations

import io
from typing import Any

import pytest
from PIL import Image

from storeadmin.api import ApiError, unwrap_list
from storeadmin.services.images import REQUIRED_HEIGHT, REQUIRED_WIDTH, UploadedImage


class FakeApi:
    """Records every call; answers from canned lists/responses."""

    def __init__(self, lists: dict | None = None, responses: dict | None = None, fail: tuple = ()) -> None:
        self.lists = lists or {}
        self.responses = responses or {}
        self.fail = set(fail)
        self.calls: list[tuple[str, str, dict]] = []

    def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        self.calls.append((method, path, kwargs))
        if (method, path) in self.fail:
            raise ApiError("Internal Server Error", status_code=500)
        return self.responses.get((method, path), {"success": True})

    def get_list(self, path: str) -> list[dict]:
        self.calls.append(("GET", path, {}))
        if ("GET", path) in self.fail:
            raise ApiError("Internal Server Error", status_code=500)
        payload = self.responses.get(("GET", path), {"success": True, "data": self.lists.get(path, [])})
        return unwrap_list(payload)

    def get(self, path: str) -> Any:
        return self._call("GET", path)

    def post(self, path: str, **kwargs: Any) -> Any:
        return self._call("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Any:
        return self._call("PUT", path, **kwargs)

    def delete(self, path: str) -> Any:
        return self._call("DELETE", path)

    def paths(self, method: str) -> list[str]:
        return [p for m, p, _ in self.calls if m == method]


def png(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture(scope="session")
def good_png() -> bytes:
    return png(REQUIRED_WIDTH, REQUIRED_HEIGHT)


@pytest.fixture(scope="session")
def bad_png() -> bytes:
    return png(800, 800)


@pytest.fixture
def good_image(good_png) -> UploadedImage:
    return UploadedImage(name="red.png", data=good_png, content_type="image/png")


@pytest.fixture
def bad_image(bad_png) -> UploadedImage:
    return UploadedImage(name="square.png", data=bad_png, content_type="image/png")


@pytest.fixture
def catalog_lists() -> dict:
    return {
        "categories": [
            {"categoryId": 1, "categoryName": "Shoes"},
            {"categoryId": 2, "categoryName": "Bags"},
        ],
        "subcategories": [
            {"subCategoryId": 10, "subCategoryName": "Sneakers", "categoryId": 1},
            {"subCategoryId": 11, "subCategoryName": "Boots", "categoryId": 1},
            {"subCategoryId": 20, "subCategoryName": "Totes", "categoryId": 2},
        ],
        "products": [
            {"productId": 100, "productName": "Air Runner", "categoryId": 1, "subCategoryId": 10},
            {"productId": 101, "productName": "Court Low", "categoryId": 1, "subCategoryId": 10},
            {"productId": 110, "productName": "Trail Boot", "categoryId": 1, "subCategoryId": 11},
            {"productId": 200, "productName": "Canvas Tote", "categoryId": 2, "subCategoryId": 20},
        ],
    }


@pytest.fixture
def fake_api(catalog_lists) -> FakeApi:
    return FakeApi(lists=catalog_lists)
