from __future__ import annotations

import pytest

from conftest import FakeApi
from storeadmin.services.banners import banner_rows, delete_banner, list_banners, save_banner
from storeadmin.services.validation import FormValidationError


def test_kinds_use_their_own_endpoints():
    api = FakeApi(
        lists={
            "home-banners": [{"homeBannerId": 1, "title": "Summer", "bannerImage": "summer.png"}],
            "collection-banners": [{"collectionBannerId": 2, "title": "Shoes"}],
        }
    )
    home = list_banners(api, "home")
    collection = list_banners(api, "collection")

    assert [b.id for b in home] == [1]
    assert [b.id for b in collection] == [2]
    assert banner_rows(home, "http://img/")[0]["Banner Image"] == "http://img/summer.png"


def test_create_banner_requires_image():
    api = FakeApi()
    with pytest.raises(FormValidationError):
        save_banner(api, "home", {"title": "Summer"})
    assert api.calls == []


def test_save_and_delete_banner(good_image):
    api = FakeApi()
    save_banner(api, "collection", {"title": "Shoes"}, image=good_image)
    save_banner(api, "collection", {"title": "Shoes 2"}, banner_id=2)
    delete_banner(api, "collection", 2)

    assert [(m, p) for m, p, _ in api.calls] == [
        ("POST", "collection-banners"),
        ("PUT", "collection-banners/2"),
        ("DELETE", "collection-banners/2"),
    ]
    assert [name for name, _ in api.calls[0][2]["files"]] == ["bannerImage"]
    assert api.calls[1][2]["files"] is None
