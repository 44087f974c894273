"""
Flask CLI commands for database management.

Commands:
- flask init-db: Create all tables
- flask seed-data: Insert sample categories, employees, customers and products
"""

import click
from decimal import Decimal
from billing.database import create_all, drop_all, get_session
from billing.models import Category, Customer, Employee, EmployeeRole, Product

SAMPLE_CATEGORIES = [
    ('Grocery', 'Daily grocery items and essentials'),
    ('Dairy', 'Milk, cheese, yogurt and other dairy products'),
    ('Beverages', 'Soft drinks, juices, water and other beverages'),
    ('Produce', 'Fresh fruits and vegetables'),
    ('Bakery', 'Bread, cakes, cookies and baked goods'),
]

SAMPLE_EMPLOYEES = [
    ('admin', 'System Administrator', 'admin@supermarket.com', EmployeeRole.ADMIN),
    ('manager1', 'Sarah Manager', 'manager@supermarket.com', EmployeeRole.MANAGER),
    ('cashier1', 'John Cashier', 'cashier1@supermarket.com', EmployeeRole.CASHIER),
    ('cashier2', 'Emily Cashier', 'cashier2@supermarket.com', EmployeeRole.CASHIER),
    ('inventory1', 'David Inventory', 'inventory@supermarket.com', EmployeeRole.INVENTORY_MANAGER),
]

# name, description, price, cost, stock, min stock, category, barcode
SAMPLE_PRODUCTS = [
    ('Organic Whole Milk', 'Fresh organic whole milk, 1L', '4.99', '3.20', 45, 10, 'Dairy', '123456789012'),
    ('White Bread', 'Fresh white bread, 500g', '2.99', '1.50', 29, 5, 'Bakery', '123456789013'),
    ('Mineral Water', 'Pure mineral water, 500ml', '1.99', '0.80', 93, 20, 'Beverages', '123456789014'),
    ('Bananas', 'Fresh bananas per kg', '1.49', '0.70', 79, 15, 'Produce', '123456789015'),
    ('Potato Chips', 'Crunchy potato chips, 150g', '3.49', '1.80', 38, 8, 'Grocery', '123456789016'),
    ('Orange Juice', 'Fresh orange juice, 1L', '3.99', '2.20', 24, 5, 'Beverages', '123456789017'),
    ('Cheddar Cheese', 'Block cheddar cheese, 200g', '5.99', '3.50', 34, 7, 'Dairy', '123456789018'),
    ('Apples', 'Fresh red apples per kg', '2.99', '1.60', 43, 10, 'Produce', '123456789019'),
    ('Chocolate Cookies', 'Chocolate chip cookies, 200g', '4.49', '2.40', 57, 12, 'Grocery', '123456789020'),
    ('Greek Yogurt', 'Greek yogurt, 500g', '3.79', '2.10', 28, 6, 'Dairy', '123456789021'),
]


def seed_sample_data(session):
    """Insert the sample data set. Returns False when data already exists."""
    if session.query(Employee).first() is not None:
        return False

    categories = {}
    for name, description in SAMPLE_CATEGORIES:
        category = Category(name=name, description=description)
        session.add(category)
        categories[name] = category
    session.flush()

    for username, name, email, role in SAMPLE_EMPLOYEES:
        session.add(Employee(username=username, name=name, email=email, role=role, active=True))

    session.add(Customer(name='Walk-in Customer', is_default=True, loyalty_points=0))
    session.add(Customer(name='John Smith', email='john@email.com', phone='555-0101', loyalty_points=150))
    session.add(Customer(name='Maria Garcia', email='maria@email.com', phone='555-0102', loyalty_points=300))

    for name, description, price, cost, stock, min_stock, category, barcode in SAMPLE_PRODUCTS:
        session.add(Product(
            name=name,
            description=description,
            price=Decimal(price),
            cost_price=Decimal(cost),
            stock_quantity=stock,
            min_stock_level=min_stock,
            category_id=categories[category].id,
            barcode=barcode,
            active=True
        ))

    session.commit()
    return True


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('init-db')
    @click.option('--drop', is_flag=True, help='Drop existing tables first')
    def init_db_command(drop):
        """Create the database tables."""
        if drop:
            drop_all()
            click.echo(click.style('Dropped existing tables.', fg='yellow'))
        create_all()
        click.echo(click.style('Database tables created.', fg='green'))

    @app.cli.command('seed-data')
    def seed_data_command():
        """Insert sample data (skipped when employees already exist)."""
        session = get_session()
        try:
            if seed_sample_data(session):
                click.echo(click.style('Sample data inserted.', fg='green', bold=True))
            else:
                click.echo(click.style('Data already present, nothing inserted.', fg='yellow'))
        except Exception as e:
            session.rollback()
            click.echo(click.style(f'Error inserting sample data: {str(e)}', fg='red'))
            raise click.Abort()
