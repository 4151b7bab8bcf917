import logging
from datetime import date

from sqlalchemy.exc import IntegrityError

from ..errors import ConflictError, NotFoundError
from ..extensions import db
from ..models import Customer

logger = logging.getLogger(__name__)


def upsert_customer(email: str, name: str, phone: str | None, visit_date: date) -> Customer:
    """
    Records a visit for ``email``.

    An existing customer gets one more visit, a new last-visit date and the
    latest name; the stored phone is only replaced by a non-empty one.
    """
    email = email.lower()
    customer = Customer.query.filter_by(email=email).one_or_none()
    if customer:
        customer.visits = (customer.visits or 0) + 1
        customer.last_visit = visit_date
        customer.name = name
        customer.phone = phone or customer.phone
    else:
        customer = Customer(name=name, email=email, phone=phone, visits=1, last_visit=visit_date)
        db.session.add(customer)

    db.session.commit()
    return customer


def list_customers() -> list[Customer]:
    return (
        Customer.query
        .order_by(Customer.last_visit.desc().nulls_last(), Customer.created_at.desc(), Customer.id.desc())
        .all()
    )


def get_customer(customer_id: int) -> Customer:
    customer = db.session.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer not found")
    return customer


def create_customer(name: str, email: str, phone: str | None, visits: int, last_visit: date) -> Customer:
    customer = Customer(name=name, email=email.lower(), phone=phone, visits=visits, last_visit=last_visit)
    db.session.add(customer)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("A customer with this email already exists", code="DUPLICATE_EMAIL")
    return customer


def update_customer(customer_id: int, changes: dict) -> Customer:
    customer = get_customer(customer_id)
    for field, value in changes.items():
        setattr(customer, field, value)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError("A customer with this email already exists", code="DUPLICATE_EMAIL")
    return customer


def delete_customer(customer_id: int) -> None:
    customer = get_customer(customer_id)
    db.session.delete(customer)
    db.session.commit()
    logger.info("Deleted customer %s", customer_id)
