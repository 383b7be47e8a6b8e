from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import get_args

from ..envelope import parse_model
from ..models_reports import ReportResult, ReportType, SalesReportRow, TopProduct
from .base import BaseClient, compact

REPORTS_PATH = "/api/reports"


def _day(value: date | str | None) -> str | None:
    if isinstance(value, date):
        return value.isoformat()
    return value


def _range_params(start_date: date | str | None, end_date: date | str | None) -> dict[str, str | None]:
    start, end = _day(start_date), _day(end_date)
    # ISO days compare correctly as strings
    if start and end and start[:10] > end[:10]:
        raise ValueError("start_date must be on or before end_date")
    return {"start_date": start, "end_date": end}


@dataclass
class ReportsClient(BaseClient):
    module_name = "reports"

    def get_sales_report(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[SalesReportRow]:
        return self._fetch(
            "GET",
            f"{REPORTS_PATH}/sales",
            list[SalesReportRow],
            operation="sales_report",
            params=compact(_range_params(start_date, end_date)),
        )

    def get_top_products(self, limit: int = 10) -> list[TopProduct]:
        return self._fetch(
            "GET",
            f"{REPORTS_PATH}/top-products",
            list[TopProduct],
            operation="top_products",
            params={"limit": limit},
        )

    def get_report(
        self,
        report_type: ReportType,
        *,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        group_by: str | None = None,
    ) -> ReportResult:
        if report_type not in get_args(ReportType):
            raise ValueError(f"Unknown report type: {report_type}")
        data = self._request(
            "GET",
            f"{REPORTS_PATH}/{report_type}",
            operation=f"{report_type}_report",
            params=compact({**_range_params(start_date, end_date), "group_by": group_by}),
        )
        return parse_model(data, ReportResult, operation=f"{report_type}_report")
