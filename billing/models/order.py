"""Order model."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base
from billing.utils.time_utils import utc_now
import enum


class OrderStatus(enum.Enum):
    """Order status enum."""
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(enum.Enum):
    """Payment method enum."""
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"
    DIGITAL_WALLET = "digital_wallet"
    OTHER = "other"


def normalize_payment_method(value) -> PaymentMethod:
    """
    Normalize a payment method coming from a request.

    Args:
        value: None, PaymentMethod enum, or string ('cash', 'Card',
            'digital-wallet', ...)

    Returns:
        PaymentMethod (CASH when value is None or blank)

    Raises:
        ValueError: If value is not a known payment method
    """
    if value is None:
        return PaymentMethod.CASH

    if isinstance(value, PaymentMethod):
        return value

    if isinstance(value, str):
        normalized = value.strip().lower().replace('-', '_').replace(' ', '_')
        if not normalized:
            return PaymentMethod.CASH
        try:
            return PaymentMethod(normalized)
        except ValueError:
            pass

    allowed = ', '.join(m.value for m in PaymentMethod)
    raise ValueError(f"Invalid payment method: {value}. Must be one of: {allowed}.")


class Order(Base):
    """Order (bill header of a completed sale)."""

    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String(40), nullable=False, unique=True, index=True)
    customer_id = Column(Integer, ForeignKey('customer.id', ondelete='SET NULL'), nullable=True)
    employee_id = Column(Integer, ForeignKey('employee.id'), nullable=False)

    total_amount = Column(Numeric(10, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(10, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False, default=0)
    final_amount = Column(Numeric(10, 2), nullable=False, default=0)

    payment_method = Column(Enum(PaymentMethod, name='payment_method'), nullable=False, default=PaymentMethod.CASH)
    status = Column(Enum(OrderStatus, name='order_status'), nullable=False, default=OrderStatus.COMPLETED)
    totals_strategy = Column(String(30), nullable=False)

    order_date = Column(DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now())
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    customer = relationship('Customer', back_populates='orders')
    employee = relationship('Employee')
    lines = relationship(
        'OrderLine',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderLine.id'
    )

    def to_dict(self):
        return {
            'order_id': self.id,
            'order_number': self.order_number,
            'customer_id': self.customer_id,
            'customer_name': self.customer.name if self.customer else None,
            'employee_id': self.employee_id,
            'employee_name': self.employee.name if self.employee else None,
            'total_amount': str(self.total_amount),
            'discount_amount': str(self.discount_amount),
            'tax_amount': str(self.tax_amount),
            'final_amount': str(self.final_amount),
            'payment_method': self.payment_method.value,
            'status': self.status.value,
            'totals_strategy': self.totals_strategy,
            'order_date': self.order_date.isoformat() if self.order_date else None,
        }

    def __repr__(self):
        return f"<Order(id={self.id}, number='{self.order_number}', final={self.final_amount})>"
