"""SQLAlchemy ORM models for the stock, purchase, sale and cost tables"""

from sqlalchemy import Column, Date, DateTime, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class StockCache(Base):
    """Advertised stock item, one row per vehicle per dealer"""

    __tablename__ = "stock_cache"

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_id = Column(String(255), nullable=False, index=True)
    dealer_id = Column(Text, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    derivative = Column(String(255), nullable=True)
    registration = Column(String(20), nullable=True)
    forecourt_price_gbp = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class InventoryDetails(Base):
    """Purchase information for a stock item"""

    __tablename__ = "inventory_details"
    __table_args__ = (UniqueConstraint("stock_id", name="inventory_details_stock_id_unique"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_id = Column(String(255), nullable=False, index=True)
    dealer_id = Column(Text, nullable=False, index=True)
    registration = Column(String(50), nullable=True)
    date_of_purchase = Column(Date, nullable=True)
    cost_of_purchase = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class SaleDetails(Base):
    """Sale record for a sold stock item"""

    __tablename__ = "sale_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_id = Column(String(255), nullable=False, index=True)
    dealer_id = Column(Text, nullable=False, index=True)
    sale_date = Column(Date, nullable=True)
    sale_price = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class VehicleCosts(Base):
    """Cost totals per stock item, split by VAT treatment"""

    __tablename__ = "vehicle_costs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    stock_id = Column(String(255), nullable=False, index=True)
    dealer_id = Column(Text, nullable=False, index=True)
    registration = Column(String(50), nullable=True)
    fixed_costs_total = Column(Numeric(10, 2), nullable=True)
    ex_vat_costs_total = Column(Numeric(10, 2), nullable=True)
    inc_vat_costs_total = Column(Numeric(10, 2), nullable=True)
    grand_total = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
