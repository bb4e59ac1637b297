import click

from salon_app.extensions import db


def register_commands(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables that don't exist yet."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("seed")
    def seed():
        """Load demo salon data into an empty database."""
        from salon_app.seed import seed_database
        seed_database()

    @app.cli.command("check-inventory")
    def check_inventory():
        """Run the low-stock and expiry checks once."""
        from salon_app.inventory_alerts import run_inventory_checks
        result = run_inventory_checks()
        click.echo(f"Created {result['low_stock']} low stock and {result['expiring_soon']} expiring alerts.")

    @app.cli.command("recalculate-earnings")
    def recalculate_earnings():
        """Rebuild commission earnings from the full service history."""
        from salon_app.earnings import recalculate_all_worker_earnings
        result = recalculate_all_worker_earnings()
        for row in result["results"]:
            click.echo(
                f"Worker {row['worker_id']}: total {row['total_earnings']:.2f}, "
                f"this month {row['current_month_earnings']:.2f}, services {row['services_performed']}"
            )
