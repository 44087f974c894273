import pytest
from decimal import Decimal

from billing import create_app
from billing.database import Base, create_all, get_session
from billing.models import Category, Customer, Employee, EmployeeRole, Product
from billing.services.checkout_service import CheckoutSettings


@pytest.fixture(scope='session')
def app():
    """Create application instance for testing."""
    app = create_app('config.TestConfig')
    create_all()
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def session(app):
    """Database session; every table is emptied after the test."""
    session = get_session()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.remove()


@pytest.fixture
def settings():
    """Discount-aware checkout at 8% tax."""
    return CheckoutSettings(tax_rate=Decimal('0.08'))


@pytest.fixture
def trigger_settings():
    return CheckoutSettings(tax_rate=Decimal('0.08'), strategy='trigger-equivalent')


@pytest.fixture
def cashier(session):
    employee = Employee(
        name='John Cashier',
        username='cashier1',
        email='cashier1@supermarket.com',
        role=EmployeeRole.CASHIER,
        active=True
    )
    session.add(employee)
    session.commit()
    return employee


@pytest.fixture
def walk_in_customer(session):
    customer = Customer(name='Walk-in Customer', is_default=True)
    session.add(customer)
    session.commit()
    return customer


@pytest.fixture
def dairy(session):
    category = Category(name='Dairy', description='Milk, cheese, yogurt')
    session.add(category)
    session.commit()
    return category


@pytest.fixture
def milk(session, dairy):
    """Product 1 of the reference cart: 4.99, 45 in stock."""
    product = Product(
        name='Organic Whole Milk',
        price=Decimal('4.99'),
        cost_price=Decimal('3.20'),
        stock_quantity=45,
        min_stock_level=10,
        category_id=dairy.id,
        barcode='123456789012',
        active=True
    )
    session.add(product)
    session.commit()
    return product


@pytest.fixture
def bread(session):
    """Product 2 of the reference cart: 2.99, 29 in stock."""
    product = Product(
        name='White Bread',
        price=Decimal('2.99'),
        cost_price=Decimal('1.50'),
        stock_quantity=29,
        min_stock_level=5,
        barcode='123456789013',
        active=True
    )
    session.add(product)
    session.commit()
    return product


@pytest.fixture
def stock_of(session):
    """Read a stock level from the database, bypassing the identity map."""
    def _stock_of(product_id):
        session.expire_all()
        return session.query(Product.stock_quantity).filter(Product.id == product_id).scalar()
    return _stock_of
