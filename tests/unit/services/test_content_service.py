"""
Tests for content validation and delegation.
"""

import pytest

from storefront.cms.errors import InvalidContentError
from storefront.models.content import FileContentType, InputContentFile, ProductImageSize
from storefront.services import StoreNotFoundError


def test_unknown_store_rejected(content_service, png_file):
    with pytest.raises(StoreNotFoundError):
        content_service.add_file("NOPE", png_file)


def test_add_and_list(content_service, default_store, png_file, text_file):
    keys = content_service.add_files("DEFAULT", [png_file, text_file])

    assert keys == ["DEFAULT/IMAGE/logo.png", "DEFAULT/STATIC_FILE/terms.txt"]
    assert content_service.get_file_names("DEFAULT", FileContentType.IMAGE) == ["logo.png"]
    assert content_service.url_for(keys[0]) == "/static/files/DEFAULT/IMAGE/logo.png"


def test_oversize_file_rejected(content_service, default_store):
    big = InputContentFile(file_name="big.txt", content=b"x" * 1025)

    with pytest.raises(InvalidContentError):
        content_service.add_file("DEFAULT", big)


def test_empty_file_rejected(content_service, default_store):
    with pytest.raises(InvalidContentError):
        content_service.add_file("DEFAULT", InputContentFile(file_name="empty.txt"))


def test_image_types_need_image_mime(content_service, default_store):
    not_image = InputContentFile(
        file_name="logo.txt", file_content_type=FileContentType.LOGO, content=b"text"
    )

    with pytest.raises(InvalidContentError):
        content_service.add_file("DEFAULT", not_image)


def test_batch_validated_before_writing(content_service, default_store, png_file):
    big = InputContentFile(file_name="big.txt", content=b"x" * 2048)

    with pytest.raises(InvalidContentError):
        content_service.add_files("DEFAULT", [png_file, big])

    assert content_service.get_file_names("DEFAULT", FileContentType.IMAGE) == []


def test_product_image_must_be_image(content_service, default_store, text_file):
    with pytest.raises(InvalidContentError):
        content_service.add_product_image("DEFAULT", "SKU1", text_file)


def test_product_images(content_service, default_store, png_file):
    content_service.add_product_image("DEFAULT", "SKU1", png_file, ProductImageSize.LARGE)

    images = content_service.get_product_images("DEFAULT", "SKU1")
    assert [i.path for i in images] == ["DEFAULT/PRODUCTLG/SKU1/logo.png"]
    assert content_service.remove_images("DEFAULT") >= 1
    assert content_service.get_product_images("DEFAULT", "SKU1") == []


def test_folders(content_service, default_store):
    content_service.add_folder("DEFAULT", FileContentType.IMAGE, "banners")

    assert [f.path for f in content_service.list_folders("DEFAULT", FileContentType.IMAGE)] == ["banners"]
    assert content_service.remove_folder("DEFAULT", FileContentType.IMAGE, "banners") == 1


@pytest.mark.parametrize("bad_name", ["..", "a\\b.txt", ".cms-folder"])
def test_names_checked_before_any_write(content_service, default_store, text_file, bad_name):
    content_service.add_file("DEFAULT", text_file)
    replacement = InputContentFile(file_name="terms.txt", content=b"replaced")
    bad = InputContentFile(file_name=bad_name, content=b"x")

    with pytest.raises(InvalidContentError):
        content_service.add_files("DEFAULT", [replacement, bad])

    assert content_service.get_file("DEFAULT", FileContentType.STATIC_FILE, "terms.txt").content == b"terms"


def test_bad_folder_checked_before_any_write(content_service, default_store, text_file):
    nested = InputContentFile(file_name="ok.txt", content=b"ok", folder="docs/../..")

    with pytest.raises(InvalidContentError):
        content_service.add_files("DEFAULT", [text_file, nested])

    assert content_service.get_file_names("DEFAULT", FileContentType.STATIC_FILE) == []
