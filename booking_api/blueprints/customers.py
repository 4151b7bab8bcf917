from datetime import date
from flask import Blueprint, jsonify
from ..models import Customer
from ..errors import parse_body
from ..schemas import CustomerRequest, UpdateCustomerRequest
from ..services import customers

bp = Blueprint("customers", __name__)


def customer_to_dict(c: Customer) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "email": c.email,
        "phone": c.phone,
        "visits": c.visits or 0,
        "lastVisit": c.last_visit.isoformat() if c.last_visit else "Never",
    }


@bp.get("")
def list_customers():
    return jsonify([customer_to_dict(c) for c in customers.list_customers()])


@bp.post("")
def create_customer():
    data = parse_body(CustomerRequest)
    customer = customers.create_customer(
        name=data.name,
        email=data.email,
        phone=data.phone,
        visits=data.visits,
        last_visit=data.last_visit or date.today(),
    )
    return jsonify(success=True, customer=customer_to_dict(customer)), 201


@bp.put("/<int:customer_id>")
def update_customer(customer_id: int):
    data = parse_body(UpdateCustomerRequest)
    customer = customers.update_customer(customer_id, data.model_dump(exclude_unset=True, exclude_none=True))
    return jsonify(success=True, customer=customer_to_dict(customer))


@bp.delete("/<int:customer_id>")
def delete_customer(customer_id: int):
    customers.delete_customer(customer_id)
    return jsonify(success=True)
