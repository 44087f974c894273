"""Employee model."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from billing.database import Base
import enum


class EmployeeRole(enum.Enum):
    """Employee role enum."""
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"
    INVENTORY_MANAGER = "inventory_manager"


class Employee(Base):
    """Employee operating the till (cashier) or managing stock."""

    __tablename__ = 'employee'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    username = Column(String(50), nullable=False, unique=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    role = Column(Enum(EmployeeRole, name='employee_role'), nullable=False, default=EmployeeRole.CASHIER)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    def __repr__(self):
        return f"<Employee(id={self.id}, username='{self.username}', role={self.role.value})>"
