from __future__ import annotations

from datetime import date

from ..models_pos import Sale
from ..models_reports import ReportResult, ReportType, SalesReportRow, TopProduct
from ..session import ApiSession
from .errors import ReportsError, normalize_error


class ReportsService:
    """Sale lookup and the dashboard reports."""

    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def sales(self) -> list[Sale]:
        try:
            return self.session.pos_client().get_sales()
        except Exception as exc:
            raise normalize_error(exc, ReportsError, "Could not load sales") from exc

    def sale(self, sale_id: int) -> Sale:
        try:
            return self.session.pos_client().get_sale(sale_id)
        except Exception as exc:
            raise normalize_error(exc, ReportsError, "Could not load the sale") from exc

    def daily_sales(self, day: date | None = None) -> list[SalesReportRow]:
        """Sales report for a single day, today by default."""
        day = day or date.today()
        return self.sales_report(day, day)

    def sales_report(
        self,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[SalesReportRow]:
        try:
            return self.session.reports_client().get_sales_report(start_date, end_date)
        except Exception as exc:
            raise normalize_error(exc, ReportsError, "Could not load the sales report") from exc

    def top_products(self, limit: int = 10) -> list[TopProduct]:
        try:
            return self.session.reports_client().get_top_products(limit)
        except Exception as exc:
            raise normalize_error(exc, ReportsError, "Could not load top products") from exc

    def report(
        self,
        report_type: ReportType,
        *,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
        group_by: str | None = None,
    ) -> ReportResult:
        try:
            return self.session.reports_client().get_report(
                report_type, start_date=start_date, end_date=end_date, group_by=group_by
            )
        except Exception as exc:
            raise normalize_error(exc, ReportsError, f"Could not load the {report_type} report") from exc
