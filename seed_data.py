from dashboard import create_app, db
from dashboard.models import Customer

PLACEHOLDER_CUSTOMERS = [
    ("Delba de Oliveira", "delba@oliveira.com", "/customers/delba-de-oliveira.png"),
    ("Lee Robinson", "lee@robinson.com", "/customers/lee-robinson.png"),
    ("Hector Simpson", "hector@simpson.com", "/customers/hector-simpson.png"),
    ("Steven Tey", "steven@tey.com", "/customers/steven-tey.png"),
]


def seed_initial_data() -> None:
    """Seed the database with placeholder customers."""
    app = create_app([])
    with app.app_context():
        for name, email, image_url in PLACEHOLDER_CUSTOMERS:
            if Customer.query.filter_by(email=email).first() is None:
                db.session.add(
                    Customer(name=name, email=email, image_url=image_url)
                )
        db.session.commit()
        print("Placeholder customers created.")


if __name__ == "__main__":
    seed_initial_data()
