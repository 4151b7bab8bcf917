import random
from datetime import date, timedelta
import click
from flask import Flask, jsonify
from flask.cli import with_appcontext
from flask_cors import CORS
from .extensions import db, migrate
from .config import Config
from .errors import register_error_handlers
from .logging_config import setup_logging
from .blueprints.analytics import bp as analytics_bp
from .blueprints.bookings import bp as bookings_bp
from .blueprints.customers import bp as customers_bp
from .blueprints.menus import bp as menus_bp
from .blueprints.settings import bp as settings_bp
from .blueprints.time_slots import bp as time_slots_bp
from .models import Booking, Customer, MenuDocument, TimeSlotPolicy
from .services import menus, slots
from .services.settings import get_settings

def create_app(config_object=Config, **overrides):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.config.update(overrides)

    setup_logging(app.config.get("LOG_LEVEL", "INFO"))
    CORS(app)

    db.init_app(app)
    migrate.init_app(app, db)

    register_error_handlers(app)

    app.register_blueprint(settings_bp, url_prefix="/api/settings")
    app.register_blueprint(time_slots_bp, url_prefix="/api/time-slots")
    app.register_blueprint(bookings_bp, url_prefix="/api/bookings")
    app.register_blueprint(customers_bp, url_prefix="/api/customers")
    app.register_blueprint(analytics_bp, url_prefix="/api/analytics")
    app.register_blueprint(menus_bp, url_prefix="/api")

    @app.get("/health")
    def health():
        return jsonify(status="ok")

    app.cli.add_command(clear_command)
    app.cli.add_command(seed_command)

    return app


def _clear_data():
    for doc in MenuDocument.query.all():
        menus.delete(doc.id)
    db.session.query(Booking).delete()
    db.session.query(Customer).delete()
    db.session.commit()


@click.command("clear")
@with_appcontext
def clear_command():
    """Deletes bookings, customers and menu documents (settings are kept)."""
    _clear_data()
    click.echo("All datasets cleared.")


@click.command("seed")
@with_appcontext
def seed_command():
    """Creates sample data for the database."""
    _clear_data()
    db.session.query(TimeSlotPolicy).delete()
    db.session.commit()
    click.echo("Cleared existing data.")

    settings = get_settings()
    slots.get_availability()

    names = ["John Smith", "Sarah Johnson", "Mike Davis", "Emily Brown", "David Wilson"]
    customers = []
    for i, name in enumerate(names):
        customer = Customer(
            name=name,
            email=f"{name.split()[0].lower()}@example.com",
            phone=f"+1 (555) 000-000{i}",
            visits=0,
        )
        customers.append(customer)
    db.session.add_all(customers)
    db.session.commit()
    click.echo(f"Created {len(customers)} customers.")

    bookings = []
    taken = set()
    today = date.today()
    for _ in range(15):
        customer = random.choice(customers)
        day = today + timedelta(days=random.randint(0, 6))
        label = random.choice(slots.CANONICAL_SLOTS)
        time_str = f"{label.split('-')[0]}:00"
        status = random.choice(["pending", "confirmed", "completed"])
        if status == "confirmed":
            if (day, time_str) in taken:
                status = "pending"
            else:
                taken.add((day, time_str))
        bookings.append(Booking(
            customer_name=customer.name,
            customer_email=customer.email,
            customer_phone=customer.phone,
            date=day,
            time=time_str,
            guests=random.randint(1, settings.max_party_size),
            table_number=random.randint(1, settings.table_count),
            status=status,
        ))
        customer.visits += 1
        customer.last_visit = max(customer.last_visit or day, day)

    db.session.add_all(bookings)
    db.session.commit()
    click.echo(f"Created {len(bookings)} bookings.")
    click.echo("Database seeded!")
