"""
End-to-end tests for the content REST API on local storage.
"""

PNG = b"\x89PNG\r\n\x1a\n" + b"\x02" * 24


def upload(client, *files, file_content_type="IMAGE", folder=None):
    data = {"file_content_type": file_content_type}
    if folder:
        data["folder"] = folder
    return client.post(
        "/api/v1/private/DEFAULT/content/files",
        files=[("files", f) for f in files],
        data=data,
    )


def test_health(test_api_client):
    response = test_api_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_status_reports_storage(test_api_client):
    body = test_api_client.get("/status").json()
    assert body["components"]["storage"] == {"status": "healthy", "backend": "local"}
    assert body["components"]["database"]["status"] == "healthy"


def test_store_crud(test_api_client):
    created = test_api_client.post(
        "/api/v1/private/stores", json={"code": "DEFAULT", "name": "Default store"}
    )
    assert created.status_code == 201

    duplicate = test_api_client.post(
        "/api/v1/private/stores", json={"code": "DEFAULT", "name": "Again"}
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["type"] == "DuplicateStoreError"

    updated = test_api_client.put("/api/v1/private/stores/DEFAULT", json={"currency": "CAD"})
    assert updated.json()["currency"] == "CAD"
    assert updated.json()["name"] == "Default store"

    listing = test_api_client.get("/api/v1/private/stores").json()
    assert listing["total"] == 1

    assert test_api_client.get("/api/v1/stores/NOPE").status_code == 404


def test_upload_list_download_delete(client_with_store):
    client = client_with_store

    response = upload(client, ("logo.png", PNG, "image/png"), ("banner.png", PNG, "image/png"))
    assert response.status_code == 201
    files = response.json()["files"]
    assert [f["path"] for f in files] == ["DEFAULT/IMAGE/logo.png", "DEFAULT/IMAGE/banner.png"]

    listing = client.get("/api/v1/DEFAULT/content/files", params={"type": "IMAGE"}).json()
    assert [f["name"] for f in listing["files"]] == ["banner.png", "logo.png"]

    download = client.get("/api/v1/DEFAULT/content/files/IMAGE/logo.png")
    assert download.status_code == 200
    assert download.content == PNG
    assert download.headers["content-type"] == "image/png"
    assert "max-age" in download.headers["cache-control"]

    static = client.get(files[0]["url"])
    assert static.status_code == 200
    assert static.content == PNG

    assert client.delete("/api/v1/private/DEFAULT/content/files/IMAGE/logo.png").status_code == 200
    missing = client.get("/api/v1/DEFAULT/content/files/IMAGE/logo.png")
    assert missing.status_code == 404
    assert missing.json()["error"]["type"] == "ContentNotFoundError"


def test_upload_to_unknown_store(test_api_client):
    response = upload(test_api_client, ("logo.png", PNG, "image/png"))
    assert response.status_code == 404


def test_oversize_upload_rejected(client_with_store):
    response = upload(
        client_with_store, ("big.txt", b"x" * 2048, "text/plain"), file_content_type="STATIC_FILE"
    )
    assert response.status_code == 400
    assert response.json()["error"]["type"] == "InvalidContentError"


def test_non_image_rejected_for_images(client_with_store):
    response = upload(client_with_store, ("notes.txt", b"notes", "text/plain"))
    assert response.status_code == 400


def test_folders(client_with_store):
    client = client_with_store

    created = client.post(
        "/api/v1/private/DEFAULT/content/folders", json={"path": "banners/summer"}
    )
    assert created.status_code == 201
    assert created.json()["name"] == "summer"

    upload(client, ("top.png", PNG, "image/png"), folder="banners/summer")

    folders = client.get("/api/v1/DEFAULT/content/folders", params={"type": "IMAGE"}).json()
    assert [f["path"] for f in folders["folders"]] == ["banners"]

    static = client.get("/static/files/DEFAULT/IMAGE/banners/summer/top.png")
    assert static.content == PNG

    removed = client.delete(
        "/api/v1/private/DEFAULT/content/folders", params={"path": "banners", "type": "IMAGE"}
    )
    assert removed.status_code == 200
    assert removed.json()["removed"] == 2


def test_xss_stripped_from_query(client_with_store):
    client = client_with_store
    upload(client, ("top.png", PNG, "image/png"), folder="banners")

    response = client.get(
        "/api/v1/DEFAULT/content/files",
        params={"type": "IMAGE", "folder": "<script>alert(1)</script>banners"},
    )

    assert response.status_code == 200
    assert response.json()["folder"] == "banners"
    assert [f["name"] for f in response.json()["files"]] == ["top.png"]


def test_product_images(client_with_store):
    client = client_with_store

    response = client.post(
        "/api/v1/private/DEFAULT/products/SKU1/images",
        files={"file": ("shoe.png", PNG, "image/png")},
        data={"size": "LARGE"},
    )
    assert response.status_code == 201
    assert response.json()["path"] == "DEFAULT/PRODUCTLG/SKU1/shoe.png"

    listing = client.get("/api/v1/DEFAULT/products/SKU1/images").json()
    assert [f["name"] for f in listing["files"]] == ["shoe.png"]

    image = client.get("/api/v1/DEFAULT/products/SKU1/images/LARGE/shoe.png")
    assert image.content == PNG
    assert client.get(response.json()["url"]).content == PNG

    assert client.get("/api/v1/DEFAULT/products/SKU1/images/SMALL/shoe.png").status_code == 404

    deleted = client.delete("/api/v1/private/DEFAULT/products/SKU1/images/shoe.png")
    assert deleted.json()["removed"] == 1


def test_delete_store_removes_content(client_with_store, local_manager):
    client = client_with_store
    upload(client, ("logo.png", PNG, "image/png"))

    response = client.delete("/api/v1/private/stores/DEFAULT")

    assert response.status_code == 200
    assert response.json()["removed"] > 0
    assert list(local_manager.iter_store_keys("DEFAULT")) == []


def test_private_routes_require_api_key(test_api_client, api_settings):
    api_settings.require_api_key = True
    api_settings.api_keys = ["secret"]

    assert test_api_client.post(
        "/api/v1/private/stores", json={"code": "DEFAULT", "name": "x"}
    ).status_code == 401
    assert test_api_client.post(
        "/api/v1/private/stores",
        json={"code": "DEFAULT", "name": "x"},
        headers={"X-API-Key": "wrong"},
    ).status_code == 403
    assert test_api_client.post(
        "/api/v1/private/stores",
        json={"code": "DEFAULT", "name": "x"},
        headers={"X-API-Key": "secret"},
    ).status_code == 201


def test_non_ascii_file_name(client_with_store):
    client = client_with_store

    response = upload(client, ("图片.txt", b"hello", "text/plain"), file_content_type="STATIC_FILE")
    assert response.status_code == 201
    url = response.json()["files"][0]["url"]

    download = client.get("/api/v1/DEFAULT/content/files/STATIC_FILE/图片.txt")
    assert download.status_code == 200
    assert download.content == b"hello"
    assert download.headers["content-disposition"].endswith(
        "filename*=UTF-8''%E5%9B%BE%E7%89%87.txt"
    )

    static = client.get(url)
    assert static.status_code == 200
    assert static.content == b"hello"


def test_failed_upload_keeps_existing_file(client_with_store):
    client = client_with_store
    upload(client, ("terms.txt", b"v1", "text/plain"), file_content_type="STATIC_FILE")

    response = upload(
        client,
        ("terms.txt", b"v2", "text/plain"),
        ("empty.txt", b"", "text/plain"),
        file_content_type="STATIC_FILE",
    )
    assert response.status_code == 400

    download = client.get("/api/v1/DEFAULT/content/files/STATIC_FILE/terms.txt")
    assert download.content == b"v1"


def test_generic_routes_reject_product_types(client_with_store):
    client = client_with_store
    created = client.post(
        "/api/v1/private/DEFAULT/products/SKU1/images",
        files={"file": ("p.png", PNG, "image/png")},
        data={"size": "SMALL"},
    )
    assert created.status_code == 201

    removed = client.delete(
        "/api/v1/private/DEFAULT/content/files/PRODUCT/p.png", params={"folder": "SKU1"}
    )
    assert removed.status_code == 400
    assert removed.json()["error"]["type"] == "InvalidContentError"

    folder = client.post(
        "/api/v1/private/DEFAULT/content/folders",
        json={"path": "SKU2", "file_content_type": "PRODUCTLG"},
    )
    assert folder.status_code == 400

    listing = client.get("/api/v1/DEFAULT/content/files", params={"type": "PRODUCT", "folder": "SKU1"})
    assert listing.status_code == 400

    uploaded = upload(client, ("q.png", PNG, "image/png"), file_content_type="PRODUCT")
    assert uploaded.status_code == 400

    # Still reachable through the product image and static routes
    assert client.get("/api/v1/DEFAULT/products/SKU1/images/SMALL/p.png").content == PNG
    assert client.get(created.json()["url"]).content == PNG
