from datetime import datetime, date, timedelta

from salon_app.extensions import db
from salon_app.models.user import User
from salon_app.models.product import Product
from salon_app.models.worker import Worker
from salon_app.models.service import Service
from salon_app.models.inventory import InventoryItem
from salon_app.earnings import recalculate_all_worker_earnings


def seed_database():
    print("Checking if database needs seeding...")

    # Check if data already exists
    if User.query.first() is not None:
        print("Database already contains data. Skipping seeding.")
        return

    print("Seeding database with initial data...")

    admin = User(username="admin", email="admin@salon.local", role="admin")
    staff = User(username="frontdesk", email="frontdesk@salon.local", role="staff")
    db.session.add_all([admin, staff])
    db.session.flush() # Flush to get IDs for created_by

    db.session.add_all([
        Product(name="Argan Oil Shampoo", category="Hair Care", unit_price=18.50, description="Sulfate-free, 250ml", created_by=admin.id),
        Product(name="Gel Polish Set", category="Nails", unit_price=42.00, created_by=admin.id),
        Product(name="Hydrating Face Mask", category="Skin Care", unit_price=1250.00, description="Salon size tub", created_by=admin.id),
    ])

    stylist = Worker(name="Maya Lopez", role="Stylist", payment_type="commission", commission_rate=12.0, created_by=admin.id)
    nail_tech = Worker(name="Sam Carter", role="Nail Technician", payment_type="commission", commission_rate=10.0, created_by=admin.id)
    manager = Worker(name="Jordan Reyes", role="Manager", payment_type="monthly", salary=3200.0, commission_rate=0.0, created_by=admin.id)
    db.session.add_all([stylist, nail_tech, manager])
    db.session.flush()

    now = datetime.utcnow()
    db.session.add_all([
        Service(service_name="Haircut & Blow-dry", service_category="Hair", service_price=65.0, staff_member_id=stylist.id,
                customer_name="Alex Kim", status="completed", date_time=now - timedelta(days=2), created_at=now - timedelta(days=2), created_by=staff.id),
        Service(service_name="Balayage", service_category="Hair", service_price=180.0, staff_member_id=stylist.id,
                customer_name="Priya Shah", status="completed", date_time=now - timedelta(days=40), created_at=now - timedelta(days=40), created_by=staff.id),
        Service(service_name="Gel Manicure", service_category="Nails", service_price=45.0, staff_member_id=nail_tech.id,
                customer_name="Dana White", status="scheduled", date_time=now + timedelta(days=1), created_by=staff.id),
    ])

    db.session.add_all([
        InventoryItem(name="Developer 20 Vol", current_stock=3, min_stock_level=5, unit_price=9.75, supplier="ProColor", created_by=admin.id),
        InventoryItem(name="Nail Polish Remover", current_stock=0, min_stock_level=2, unit_price=4.20, created_by=admin.id),
        InventoryItem(name="Keratin Treatment", current_stock=6, min_stock_level=2, unit_price=55.0,
                      expiry_date=date.today() + timedelta(days=12), supplier="SmoothCo", created_by=admin.id),
        InventoryItem(name="Cotton Pads", current_stock=250, min_stock_level=50, unit_price=0.05, created_by=admin.id),
    ])

    try:
        db.session.commit()
        recalculate_all_worker_earnings()
        print("Database seeded successfully!")
    except Exception as e:
        db.session.rollback()
        print(f"Error seeding database: {e}")


if __name__ == "__main__":
    from salon_app.main import create_app

    app = create_app()
    with app.app_context():
        seed_database()
