"""Customer model."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base


class Customer(Base):
    """Customer (the is_default row is the walk-in customer)."""

    __tablename__ = 'customer'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True, unique=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    loyalty_points = Column(Integer, nullable=False, default=0, server_default='0')
    is_default = Column(Boolean, nullable=False, default=False, server_default='false')
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    orders = relationship('Order', back_populates='customer')

    def to_dict(self):
        return {
            'customer_id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'loyalty_points': self.loyalty_points,
            'is_default': self.is_default,
        }

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.name}', is_default={self.is_default})>"
