"""
Menu PDF documents.

Each menu category (the food menu, the wine menu, or a numbered menu item)
can hold several uploaded PDFs. The document flagged ``is_active`` is the
one served to guests; admins switch it with ``set_active``.
"""
import enum
import logging
import os
import uuid
from dataclasses import dataclass

from flask import current_app
from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from ..errors import NotFoundError, StorageError, ValidationError
from ..extensions import db
from ..models import MenuDocument

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
ITEM_LABEL_PREFIX = "Menu Item "


class MenuKind(enum.Enum):
    FOOD = "food_menu"
    WINE = "wine_menu"
    ITEM = "item"


_FIXED_LABELS = {
    MenuKind.FOOD: "Food Menu",
    MenuKind.WINE: "Wine Menu",
}


@dataclass(frozen=True)
class MenuCategory:
    kind: MenuKind
    number: int | None = None

    @property
    def label(self) -> str:
        if self.kind is MenuKind.ITEM:
            return f"{ITEM_LABEL_PREFIX}{self.number}"
        return _FIXED_LABELS[self.kind]

    @property
    def identifier(self) -> str:
        if self.kind is MenuKind.ITEM:
            return str(self.number)
        return self.kind.value

    @classmethod
    def from_identifier(cls, identifier: str) -> "MenuCategory":
        """'food_menu' | 'wine_menu' | '<n>' as used in public menu URLs."""
        ident = str(identifier).strip()
        if ident == MenuKind.FOOD.value:
            return cls(MenuKind.FOOD)
        if ident == MenuKind.WINE.value:
            return cls(MenuKind.WINE)
        return cls(MenuKind.ITEM, _item_number(ident, identifier))

    @classmethod
    def from_label(cls, label: str) -> "MenuCategory":
        """'Food Menu' | 'Wine Menu' | 'Menu Item <n>' as stored on documents."""
        text = str(label).strip()
        for kind, fixed in _FIXED_LABELS.items():
            if text == fixed:
                return cls(kind)
        if text.startswith(ITEM_LABEL_PREFIX):
            return cls(MenuKind.ITEM, _item_number(text[len(ITEM_LABEL_PREFIX):], label))
        raise ValidationError(f"Unknown menu category '{label}'.", code="UNKNOWN_MENU")


def _item_number(text: str, original) -> int:
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise ValidationError(f"Unknown menu category '{original}'.", code="UNKNOWN_MENU")
    return int(text)


def upload_dir() -> str:
    path = current_app.config["UPLOAD_FOLDER"]
    os.makedirs(path, exist_ok=True)
    return path


def document_path(doc: MenuDocument) -> str:
    return os.path.join(upload_dir(), doc.filename)


def file_exists(doc: MenuDocument) -> bool:
    return os.path.isfile(document_path(doc))


def upload(category: MenuCategory, file) -> MenuDocument:
    """Stores an uploaded PDF (a werkzeug ``FileStorage``) as a new active document."""
    if file is None or not file.filename:
        raise ValidationError("No PDF file uploaded", code="MISSING_FILE", status=400)
    if file.mimetype != PDF_MIME_TYPE:
        raise ValidationError("Only PDF files are allowed", code="NOT_A_PDF", status=400)

    ext = os.path.splitext(file.filename)[1].lower() or ".pdf"
    filename = f"{uuid.uuid4().hex}{ext}"
    path = os.path.join(upload_dir(), filename)
    try:
        file.save(path)
    except OSError as e:
        raise StorageError("Failed to store PDF file") from e

    doc = MenuDocument(
        title=file.filename,
        menu_title=category.label,
        filename=filename,
        file_size=os.path.getsize(path),
        mime_type=file.mimetype,
        is_active=True,
    )
    db.session.add(doc)
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        os.remove(path)
        raise

    logger.info("Uploaded %s for %s as document %s", doc.title, doc.menu_title, doc.id)
    return doc


def get_document(document_id: int) -> MenuDocument:
    doc = db.session.get(MenuDocument, document_id)
    if doc is None:
        raise NotFoundError("PDF not found")
    return doc


def list_documents(category: MenuCategory) -> list[MenuDocument]:
    return (
        MenuDocument.query.filter_by(menu_title=category.label)
        .order_by(MenuDocument.created_at.desc(), MenuDocument.id.desc())
        .all()
    )


def list_active() -> list[MenuDocument]:
    return (
        MenuDocument.query.filter_by(is_active=True)
        .order_by(MenuDocument.updated_at.asc(), MenuDocument.id.asc())
        .all()
    )


def get_active(category: MenuCategory) -> MenuDocument:
    """
    The document currently served for ``category``.

    Uploads do not deactivate older documents, so several can be active at
    once; the most recently updated one (then the newest id) wins.
    """
    doc = (
        MenuDocument.query.filter_by(menu_title=category.label, is_active=True)
        .order_by(MenuDocument.updated_at.desc(), MenuDocument.id.desc())
        .first()
    )
    if doc is None:
        raise NotFoundError("PDF not found for this menu item")
    return doc


def set_active(document_id: int, category: MenuCategory | None = None) -> MenuDocument:
    doc = get_document(document_id)
    if category is not None and category.label != doc.menu_title:
        raise ValidationError(
            f"PDF {document_id} belongs to '{doc.menu_title}', not '{category.label}'.",
            code="MENU_MISMATCH",
        )

    db.session.execute(
        update(MenuDocument)
        .where(MenuDocument.menu_title == doc.menu_title, MenuDocument.id != doc.id)
        .values(is_active=False)
    )
    doc.is_active = True
    db.session.commit()
    logger.info("Document %s is now the active %s", doc.id, doc.menu_title)
    return doc


def deactivate(document_id: int) -> MenuDocument:
    doc = get_document(document_id)
    doc.is_active = False
    db.session.commit()
    return doc


def delete(document_id: int) -> None:
    """Removes the document row and its stored file. Irreversible."""
    doc = get_document(document_id)
    path = document_path(doc)
    db.session.delete(doc)
    db.session.commit()

    if os.path.exists(path):
        os.remove(path)
    logger.info("Deleted document %s (%s)", document_id, path)
