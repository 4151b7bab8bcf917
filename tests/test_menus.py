import io
import os

import pytest
from werkzeug.datastructures import FileStorage

from booking_api.errors import NotFoundError, ValidationError
from booking_api.extensions import db
from booking_api.models import MenuDocument
from booking_api.services import menus
from booking_api.services.menus import MenuCategory, MenuKind

PDF_BYTES = b"%PDF-1.4\n%test\n"


def pdf(name="menu.pdf", content_type="application/pdf"):
    return FileStorage(stream=io.BytesIO(PDF_BYTES), filename=name, content_type=content_type)


@pytest.mark.parametrize("identifier, label", [
    ("food_menu", "Food Menu"),
    ("wine_menu", "Wine Menu"),
    ("3", "Menu Item 3"),
])
def test_category_mapping(identifier, label):
    category = MenuCategory.from_identifier(identifier)
    assert category.label == label
    assert category.identifier == identifier
    assert MenuCategory.from_label(label) == category


@pytest.mark.parametrize("identifier", ["drinks", "0", "-1", "3a", ""])
def test_unknown_identifiers_are_rejected(identifier):
    with pytest.raises(ValidationError):
        MenuCategory.from_identifier(identifier)


def test_unknown_labels_are_rejected():
    with pytest.raises(ValidationError):
        MenuCategory.from_label("Dessert Menu")
    with pytest.raises(ValidationError):
        MenuCategory.from_label("Menu Item x")


def test_upload_stores_file_and_active_record(app):
    doc = menus.upload(MenuCategory(MenuKind.FOOD), pdf("food.pdf"))

    assert doc.is_active is True
    assert doc.menu_title == "Food Menu"
    assert doc.title == "food.pdf"
    assert doc.file_size == len(PDF_BYTES)
    assert doc.filename != "food.pdf"
    assert os.path.isfile(menus.document_path(doc))


def test_upload_rejects_non_pdf(app):
    with pytest.raises(ValidationError):
        menus.upload(MenuCategory(MenuKind.FOOD), pdf("menu.txt", "text/plain"))
    assert MenuDocument.query.count() == 0


def test_set_active_leaves_exactly_one_active(app):
    wine = MenuCategory(MenuKind.WINE)
    doc1 = menus.upload(wine, pdf("w1.pdf"))
    doc2 = menus.upload(wine, pdf("w2.pdf"))
    doc3 = menus.upload(wine, pdf("w3.pdf"))
    food = menus.upload(MenuCategory(MenuKind.FOOD), pdf("f.pdf"))

    menus.set_active(doc2.id, wine)

    assert menus.get_active(wine).id == doc2.id
    assert db.session.get(MenuDocument, doc1.id).is_active is False
    assert db.session.get(MenuDocument, doc3.id).is_active is False
    assert db.session.get(MenuDocument, food.id).is_active is True


def test_set_active_reactivates_an_inactive_document(app):
    wine = MenuCategory(MenuKind.WINE)
    doc1 = menus.upload(wine, pdf("w1.pdf"))
    doc2 = menus.upload(wine, pdf("w2.pdf"))
    menus.deactivate(doc1.id)

    menus.set_active(doc1.id)

    assert menus.get_active(wine).id == doc1.id
    assert db.session.get(MenuDocument, doc2.id).is_active is False


def test_set_active_rejects_wrong_category(app):
    doc = menus.upload(MenuCategory(MenuKind.WINE), pdf())
    with pytest.raises(ValidationError):
        menus.set_active(doc.id, MenuCategory(MenuKind.FOOD))


def test_set_active_missing_document(app):
    with pytest.raises(NotFoundError):
        menus.set_active(404, MenuCategory(MenuKind.WINE))


def test_get_active_with_several_active_prefers_newest(app):
    item = MenuCategory(MenuKind.ITEM, 2)
    menus.upload(item, pdf("old.pdf"))
    newer = menus.upload(item, pdf("new.pdf"))

    assert menus.get_active(item).id == newer.id


def test_deactivate_does_not_promote_another(app):
    food = MenuCategory(MenuKind.FOOD)
    doc = menus.upload(food, pdf())
    menus.deactivate(doc.id)

    with pytest.raises(NotFoundError):
        menus.get_active(food)


def test_delete_removes_record_and_file(app):
    food = MenuCategory(MenuKind.FOOD)
    keep = menus.upload(food, pdf("keep.pdf"))
    gone = menus.upload(food, pdf("gone.pdf"))
    gone_id = gone.id
    path = menus.document_path(gone)

    menus.delete(gone_id)

    assert not os.path.exists(path)
    assert db.session.get(MenuDocument, gone_id) is None
    assert menus.get_active(food).id == keep.id

    menus.delete(keep.id)
    with pytest.raises(NotFoundError):
        menus.get_active(food)


# HTTP surface

def upload_via_http(client, menu_id, name="menu.pdf"):
    return client.post(
        f"/api/menu/{menu_id}/pdf",
        data={"menuPdf": (io.BytesIO(PDF_BYTES), name, "application/pdf")},
        content_type="multipart/form-data",
    )


def test_upload_and_download_active_pdf(client):
    r = upload_via_http(client, "wine_menu", "wine.pdf")
    assert r.status_code == 201
    body = r.get_json()
    assert body["pdfFile"]["originalName"] == "wine.pdf"

    r = client.get("/api/menu/wine_menu/pdf")
    assert r.status_code == 200
    assert r.mimetype == "application/pdf"
    assert r.data == PDF_BYTES
    assert "wine.pdf" in r.headers["Content-Disposition"]


def test_upload_without_file_is_400(client):
    r = client.post("/api/menu/food_menu/pdf", data={}, content_type="multipart/form-data")
    assert r.status_code == 400
    assert r.get_json()["code"] == "MISSING_FILE"


def test_unknown_menu_identifier_is_422(client):
    r = upload_via_http(client, "cocktails")
    assert r.status_code == 422
    assert r.get_json()["code"] == "UNKNOWN_MENU"


def test_current_menu_lists_active_pdf_per_identifier(client):
    upload_via_http(client, "food_menu", "food.pdf")
    upload_via_http(client, "7", "item7.pdf")

    body = client.get("/api/menu").get_json()
    assert body["food_menu"]["originalName"] == "food.pdf"
    assert body["7"]["originalName"] == "item7.pdf"
    assert "wine_menu" not in body


def test_admin_list_shows_active_and_inactive(client, admin_headers):
    first = upload_via_http(client, "wine_menu", "a.pdf").get_json()["pdfId"]
    second = upload_via_http(client, "wine_menu", "b.pdf").get_json()["pdfId"]
    client.put(f"/api/menu-pdfs/{first}/set-active", json={"menuTitle": "Wine Menu"}, headers=admin_headers)

    rows = client.get("/api/menu-pdfs", query_string={"menuTitle": "Wine Menu"}).get_json()
    states = {row["id"]: row["isActive"] for row in rows}
    assert states == {first: True, second: False}


def test_admin_list_requires_menu_title(client):
    r = client.get("/api/menu-pdfs")
    assert r.status_code == 400


def test_set_active_requires_bearer_token(client):
    doc_id = upload_via_http(client, "wine_menu").get_json()["pdfId"]

    r = client.put(f"/api/menu-pdfs/{doc_id}/set-active", json={"menuTitle": "Wine Menu"})
    assert r.status_code == 401
    assert r.get_json()["code"] == "UNAUTHORIZED"

    r = client.put(
        f"/api/menu-pdfs/{doc_id}/set-active",
        json={"menuTitle": "Wine Menu"},
        headers={"Authorization": "Bearer wrong"},
    )
    assert r.status_code == 403
    assert r.get_json()["code"] == "FORBIDDEN"


def test_admin_set_active_deactivate_and_delete(client, admin_headers):
    doc_id = upload_via_http(client, "food_menu").get_json()["pdfId"]

    r = client.put(f"/api/menu-pdfs/{doc_id}/set-active", json={"menuTitle": "Food Menu"}, headers=admin_headers)
    assert r.status_code == 200

    r = client.put(f"/api/menu-pdfs/{doc_id}/deactivate", headers=admin_headers)
    assert r.status_code == 200
    assert client.get("/api/menu/food_menu/pdf").status_code == 404

    assert client.delete(f"/api/menu-pdfs/{doc_id}", headers=admin_headers).status_code == 200
    assert client.delete(f"/api/menu-pdfs/{doc_id}", headers=admin_headers).status_code == 404


def test_delete_active_pdf_by_menu_identifier(client):
    upload_via_http(client, "3")
    assert client.delete("/api/menu/3/pdf").status_code == 200
    assert client.get("/api/menu/3/pdf").status_code == 404
