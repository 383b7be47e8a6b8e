from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

ReportType = Literal["sales", "products", "inventory", "customers", "financial", "taxes"]


class SalesReportRow(BaseModel):
    """One day of the sales report."""

    model_config = ConfigDict(extra="allow")

    date: str
    total_sales: int = 0
    total_revenue: Decimal = Decimal("0")
    total_transactions: int = 0


class TopProduct(BaseModel):
    model_config = ConfigDict(extra="allow")

    product_id: int
    product_name: str | None = None
    quantity_sold: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")


class ReportResult(BaseModel):
    # /api/reports/<type> returns rows plus an optional summary next to them
    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    data: Any = None
    summary: Any = None
