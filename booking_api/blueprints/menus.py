from flask import Blueprint, request, jsonify, send_from_directory
from ..auth import require_admin
from ..errors import NotFoundError, ValidationError, parse_body
from ..models import MenuDocument
from ..schemas import SetActiveRequest
from ..services import menus
from ..services.menus import MenuCategory
from ..utils.time import api_iso_z

bp = Blueprint("menus", __name__)


def pdf_file_to_dict(doc: MenuDocument) -> dict:
    return {
        "id": doc.id,
        "filename": doc.filename,
        "originalName": doc.title,
        "mimetype": doc.mime_type,
        "size": doc.file_size,
        "uploadDate": api_iso_z(doc.created_at),
    }


def document_to_dict(doc: MenuDocument) -> dict:
    return {
        "id": doc.id,
        "title": doc.title,
        "menuTitle": doc.menu_title,
        "filename": doc.filename,
        "fileSize": doc.file_size,
        "mimeType": doc.mime_type,
        "createdAt": api_iso_z(doc.created_at),
        "isActive": doc.is_active,
    }


@bp.get("/menu")
def current_menu():
    """Active PDF per menu identifier; later entries overwrite earlier ones."""
    served = {}
    for doc in menus.list_active():
        category = MenuCategory.from_label(doc.menu_title)
        served[category.identifier] = pdf_file_to_dict(doc)
    return jsonify(served)


@bp.post("/menu/<menu_id>/pdf")
def upload_pdf(menu_id: str):
    category = MenuCategory.from_identifier(menu_id)
    doc = menus.upload(category, request.files.get("menuPdf"))
    return jsonify(
        success=True,
        message="PDF uploaded successfully",
        pdfId=doc.id,
        pdfFile=pdf_file_to_dict(doc),
    ), 201


@bp.get("/menu/<menu_id>/pdf")
def download_pdf(menu_id: str):
    doc = menus.get_active(MenuCategory.from_identifier(menu_id))
    if not menus.file_exists(doc):
        raise NotFoundError("PDF file not found on server", code="FILE_MISSING")
    return send_from_directory(
        menus.upload_dir(),
        doc.filename,
        mimetype=doc.mime_type,
        as_attachment=True,
        download_name=doc.title,
    )


@bp.delete("/menu/<menu_id>/pdf")
def delete_active_pdf(menu_id: str):
    doc = menus.get_active(MenuCategory.from_identifier(menu_id))
    menus.delete(doc.id)
    return jsonify(success=True, message="PDF deleted successfully")


@bp.get("/menu-pdfs")
def list_pdfs():
    menu_title = (request.args.get("menuTitle") or "").strip()
    if not menu_title:
        raise ValidationError("menuTitle query parameter is required", code="MISSING_MENU_TITLE", status=400)
    docs = menus.list_documents(MenuCategory.from_label(menu_title))
    return jsonify([document_to_dict(d) for d in docs])


@bp.put("/menu-pdfs/<int:pdf_id>/set-active")
def set_active_pdf(pdf_id: int):
    require_admin()
    payload = request.get_json(silent=True) or {}
    data = parse_body(SetActiveRequest, payload)
    category = MenuCategory.from_label(data.menu_title) if data.menu_title else None
    menus.set_active(pdf_id, category)
    return jsonify(success=True, message="PDF set as active successfully")


@bp.put("/menu-pdfs/<int:pdf_id>/deactivate")
def deactivate_pdf(pdf_id: int):
    require_admin()
    menus.deactivate(pdf_id)
    return jsonify(success=True, message="PDF removed from main successfully")


@bp.delete("/menu-pdfs/<int:pdf_id>")
def delete_pdf(pdf_id: int):
    require_admin()
    menus.delete(pdf_id)
    return jsonify(success=True, message="PDF deleted successfully")
