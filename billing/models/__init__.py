"""Models package - exports all SQLAlchemy models."""
from billing.models.category import Category
from billing.models.product import Product, StockStatus
from billing.models.customer import Customer
from billing.models.employee import Employee, EmployeeRole
from billing.models.order import Order, OrderStatus, PaymentMethod, normalize_payment_method
from billing.models.order_line import OrderLine
from billing.models.inventory_movement import InventoryMovement, MovementDirection

__all__ = [
    'Category', 'Product', 'StockStatus',
    'Customer', 'Employee', 'EmployeeRole',
    'Order', 'OrderStatus', 'PaymentMethod', 'normalize_payment_method',
    'OrderLine',
    'InventoryMovement', 'MovementDirection',
]
