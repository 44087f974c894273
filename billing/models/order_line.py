"""Order Line model."""
from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base


class OrderLine(Base):
    """Order Line. unit_price is a snapshot taken at the time of sale."""

    __tablename__ = 'order_line'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey('product.id', ondelete='RESTRICT'), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    subtotal = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    order = relationship('Order', back_populates='lines')
    product = relationship('Product')

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_order_line_quantity_positive'),
    )

    def to_dict(self):
        return {
            'order_line_id': self.id,
            'order_id': self.order_id,
            'product_id': self.product_id,
            'product_name': self.product.name if self.product else None,
            'barcode': self.product.barcode if self.product else None,
            'quantity': self.quantity,
            'unit_price': str(self.unit_price),
            'subtotal': str(self.subtotal),
        }

    def __repr__(self):
        return f"<OrderLine(id={self.id}, product_id={self.product_id}, quantity={self.quantity})>"
