"""Inventory Movement model."""
from sqlalchemy import Column, Integer, Text, DateTime, Enum, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base
from billing.utils.time_utils import utc_now
import enum


class MovementDirection(enum.Enum):
    """Inventory movement direction enum."""
    IN = "IN"
    OUT = "OUT"
    ADJUST = "ADJUST"


class InventoryMovement(Base):
    """Inventory Movement (append-only stock audit trail)."""

    __tablename__ = 'inventory_movement'

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey('product.id'), nullable=False, index=True)
    direction = Column(Enum(MovementDirection, name='movement_direction'), nullable=False)
    quantity = Column(Integer, nullable=False)
    employee_id = Column(Integer, ForeignKey('employee.id'), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, server_default=func.now())

    # Relationships
    product = relationship('Product')
    employee = relationship('Employee')

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_inventory_movement_quantity_positive'),
    )

    def to_dict(self):
        return {
            'movement_id': self.id,
            'product_id': self.product_id,
            'direction': self.direction.value,
            'quantity': self.quantity,
            'employee_id': self.employee_id,
            'notes': self.notes,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<InventoryMovement(id={self.id}, product_id={self.product_id}, direction={self.direction.value})>"
