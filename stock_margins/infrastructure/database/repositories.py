"""Data access layer: assembles margin records from the dealer's tables"""

from typing import List, Optional
from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session
from stock_margins.infrastructure.database.models import InventoryDetails, SaleDetails, StockCache, VehicleCosts
from stock_margins.domain.models import StockMarginRecord


class MarginRecordRepository:
    """Reads the stock, purchase, sale and cost rows a margin calculation needs"""

    def __init__(self, db: Session):
        self.db = db

    def get_record(self, stock_id: str, dealer_id: str) -> Optional[StockMarginRecord]:
        """
        Fetch one vehicle's joined record.

        Returns None when the dealer has no stock row or no purchase row for
        the vehicle; sale and cost rows are optional.
        """
        stock = self._first(StockCache, stock_id, dealer_id)
        if stock is None:
            return None

        inventory = self._first(InventoryDetails, stock_id, dealer_id)
        if inventory is None:
            return None

        sale = self._first(SaleDetails, stock_id, dealer_id)
        costs = self._first(VehicleCosts, stock_id, dealer_id)

        return StockMarginRecord(
            stock_id=stock.stock_id,
            registration=stock.registration or inventory.registration,
            make=stock.make,
            model=stock.model,
            purchase_price=inventory.cost_of_purchase,
            purchase_date=inventory.date_of_purchase,
            sale_price=sale.sale_price if sale else None,
            forecourt_price=stock.forecourt_price_gbp,
            sale_date=sale.sale_date if sale else None,
            grand_total=costs.grand_total if costs else None,
            inc_vat_costs_total=costs.inc_vat_costs_total if costs else None,
            ex_vat_costs_total=costs.ex_vat_costs_total if costs else None,
            fixed_costs_total=costs.fixed_costs_total if costs else None,
        )

    def list_records(self, dealer_id: str, limit: int = 1000, offset: int = 0) -> List[StockMarginRecord]:
        """Dealer stock left-joined with purchase, sale and cost rows"""
        stmt = (
            select(
                StockCache.stock_id,
                StockCache.registration,
                StockCache.make,
                StockCache.model,
                StockCache.forecourt_price_gbp,
                InventoryDetails.cost_of_purchase,
                InventoryDetails.date_of_purchase,
                SaleDetails.sale_price,
                SaleDetails.sale_date,
                VehicleCosts.grand_total,
                VehicleCosts.inc_vat_costs_total,
                VehicleCosts.ex_vat_costs_total,
                VehicleCosts.fixed_costs_total,
            )
            .select_from(StockCache)
            .outerjoin(InventoryDetails, self._same_vehicle(InventoryDetails))
            .outerjoin(SaleDetails, self._same_vehicle(SaleDetails))
            .outerjoin(VehicleCosts, self._same_vehicle(VehicleCosts))
            .where(StockCache.dealer_id == dealer_id)
            .order_by(StockCache.id)
            .limit(limit)
            .offset(offset)
        )

        return [
            StockMarginRecord(
                stock_id=row.stock_id,
                registration=row.registration,
                make=row.make,
                model=row.model,
                purchase_price=row.cost_of_purchase,
                purchase_date=row.date_of_purchase,
                sale_price=row.sale_price,
                forecourt_price=row.forecourt_price_gbp,
                sale_date=row.sale_date,
                grand_total=row.grand_total,
                inc_vat_costs_total=row.inc_vat_costs_total,
                ex_vat_costs_total=row.ex_vat_costs_total,
                fixed_costs_total=row.fixed_costs_total,
            )
            for row in self.db.execute(stmt)
        ]

    def count_stock(self, dealer_id: str) -> int:
        """Number of stock items the dealer holds"""
        stmt = select(func.count(StockCache.id)).where(StockCache.dealer_id == dealer_id)
        return self.db.execute(stmt).scalar_one()

    def _first(self, model, stock_id: str, dealer_id: str):
        return (
            self.db.query(model)
            .filter(model.stock_id == stock_id, model.dealer_id == dealer_id)
            .first()
        )

    @staticmethod
    def _same_vehicle(model):
        return and_(model.stock_id == StockCache.stock_id, model.dealer_id == StockCache.dealer_id)
