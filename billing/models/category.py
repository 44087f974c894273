"""Category model."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from billing.database import Base


class Category(Base):
    """Product Category."""

    __tablename__ = 'category'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self):
        return {
            'category_id': self.id,
            'name': self.name,
            'description': self.description,
        }

    def __repr__(self):
        return f"<Category(id={self.id}, name='{self.name}')>"
