"""
Local and Redis managers must agree on keys and counts for the same contents.
"""

import fakeredis
import pytest

from storefront.cms.errors import InvalidContentError
from storefront.cms.local import LocalContentAssetsManager
from storefront.cms.redis_store import RedisContentAssetsManager
from storefront.models.content import FileContentType, InputContentFile, ProductImageSize

PNG = b"\x89PNG\r\n\x1a\n" + b"\x03" * 8


@pytest.fixture(params=["local", "redis"])
def manager(request, tmp_path):
    if request.param == "local":
        return LocalContentAssetsManager(tmp_path / "store")
    return RedisContentAssetsManager(namespace="parity", client=fakeredis.FakeRedis())


def image(name, folder=None):
    return InputContentFile(
        file_name=name, file_content_type=FileContentType.IMAGE, content=PNG, folder=folder
    )


def populate(manager):
    manager.add_folder("DEFAULT", FileContentType.IMAGE, "banners/summer")
    manager.add_file("DEFAULT", image("top.png", folder="banners/summer"))
    manager.add_file("DEFAULT", image("side.png", folder="banners"))
    manager.add_file("DEFAULT", image("logo.png"))
    manager.add_product_image("DEFAULT", "SKU1", image("shoe.png"), ProductImageSize.SMALL)
    manager.add_product_image("DEFAULT", "SKU1", image("shoe.png"), ProductImageSize.LARGE)


def test_store_keys(manager):
    populate(manager)

    assert list(manager.iter_store_keys("DEFAULT")) == [
        "DEFAULT/IMAGE/banners/side.png",
        "DEFAULT/IMAGE/banners/summer/",
        "DEFAULT/IMAGE/banners/summer/top.png",
        "DEFAULT/IMAGE/logo.png",
        "DEFAULT/PRODUCT/SKU1/shoe.png",
        "DEFAULT/PRODUCTLG/SKU1/shoe.png",
    ]


def test_remove_counts(manager):
    populate(manager)

    assert manager.remove_folder("DEFAULT", FileContentType.IMAGE, "banners") == 3
    assert manager.remove_images("DEFAULT") == 2
    assert manager.remove_files("DEFAULT") == 1
    assert list(manager.iter_store_keys("DEFAULT")) == []


def test_remove_files_count(manager):
    populate(manager)

    assert manager.remove_files("DEFAULT") == 6


def test_folder_listing_after_last_file_removed(manager):
    manager.add_file("DEFAULT", image("a.png", folder="implicit"))
    manager.add_folder("DEFAULT", FileContentType.IMAGE, "explicit")
    manager.add_file("DEFAULT", image("b.png", folder="explicit"))

    manager.remove_file("DEFAULT", FileContentType.IMAGE, "a.png", "implicit")
    manager.remove_file("DEFAULT", FileContentType.IMAGE, "b.png", "explicit")

    folders = manager.list_folders("DEFAULT", FileContentType.IMAGE)
    assert [f.path for f in folders] == ["explicit"]


def test_failed_batch_restores_overwritten_file(manager):
    manager.add_file("DEFAULT", InputContentFile(file_name="terms.txt", content=b"v1"))

    with pytest.raises(InvalidContentError):
        manager.add_files(
            "DEFAULT",
            [
                InputContentFile(file_name="terms.txt", content=b"v2"),
                InputContentFile(file_name="..", content=b"x"),
            ],
        )

    output = manager.get_file("DEFAULT", FileContentType.STATIC_FILE, "terms.txt")
    assert output.content == b"v1"
    assert output.mime_type == "text/plain"
