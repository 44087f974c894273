"""Product model."""
from sqlalchemy import Column, Integer, String, Text, Boolean, Numeric, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from billing.database import Base


class StockStatus:
    """Stock status labels exposed by the catalog."""
    OUT_OF_STOCK = 'OUT_OF_STOCK'
    LOW = 'LOW'
    IN_STOCK = 'IN_STOCK'


class Product(Base):
    """Product model."""

    __tablename__ = 'product'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    category_id = Column(Integer, ForeignKey('category.id', ondelete='SET NULL'), nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    cost_price = Column(Numeric(10, 2), nullable=False, default=0, server_default='0.00')
    stock_quantity = Column(Integer, nullable=False, default=0, server_default='0')
    min_stock_level = Column(Integer, nullable=False, default=10, server_default='10')
    barcode = Column(String(50), nullable=True, unique=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    category = relationship('Category', foreign_keys=[category_id])

    __table_args__ = (
        CheckConstraint('stock_quantity >= 0', name='ck_product_stock_non_negative'),
        CheckConstraint('price >= 0', name='ck_product_price_non_negative'),
    )

    @property
    def stock_status(self):
        """OUT_OF_STOCK at zero, LOW at or below min_stock_level, IN_STOCK otherwise."""
        if self.stock_quantity <= 0:
            return StockStatus.OUT_OF_STOCK
        if self.stock_quantity <= self.min_stock_level:
            return StockStatus.LOW
        return StockStatus.IN_STOCK

    def to_dict(self):
        return {
            'product_id': self.id,
            'name': self.name,
            'description': self.description,
            'category_id': self.category_id,
            'category_name': self.category.name if self.category else None,
            'price': str(self.price),
            'stock_quantity': self.stock_quantity,
            'min_stock_level': self.min_stock_level,
            'barcode': self.barcode,
            'stock_status': self.stock_status,
        }

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock_quantity})>"
