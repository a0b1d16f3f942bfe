from __future__ import annotations

import csv
import io
import logging

from flask import Flask, jsonify, request

from ..common.pagination import paginate
from ..common.validators import require_non_empty
from ..common.web import json_error, login_required, parse_date_arg, parse_int_arg
from ..core.constants import REPORT_PAGE_SIZE_COMPACT
from ..core.enums import ReportPeriod
from ..core.exceptions import StoreError, ValidationError
from ..container import Container
from .service import ReportData

logger = logging.getLogger(__name__)

CSV_FIELDS = ["roll_no", "name", "class_section", "date", "subject", "status", "created_at"]


def register(app: Flask, container: Container) -> None:
    def _load_report() -> ReportData:
        class_id = require_non_empty(request.args.get("class_id", ""), "Class")
        period_s = request.args.get("period", ReportPeriod.TODAY.value)
        try:
            period = ReportPeriod(period_s)
        except ValueError:
            raise ValidationError(f"Unknown report period: {period_s}")

        date_range = container.report_service.resolve_range(
            period,
            start=parse_date_arg(request.args.get("start"), "start"),
            end=parse_date_arg(request.args.get("end"), "end"),
        )
        return container.report_service.build_attendance_report(
            class_id=class_id,
            date_range=date_range,
            subject_name=request.args.get("subject") or None,
        )

    def _write_report_csv(*, data: ReportData, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/reports", methods=["GET"], endpoint="attendance_report")
    @login_required
    def attendance_report():
        try:
            data = _load_report()
            compact = request.args.get("compact") in {"1", "true", "yes"}
            default_size = REPORT_PAGE_SIZE_COMPACT if compact else container.report_page_size
            page = paginate(
                data.rows,
                page=parse_int_arg(request.args.get("page"), "page", 1),
                per_page=parse_int_arg(request.args.get("per_page"), "per_page", default_size),
            )
        except ValidationError as e:
            return json_error(str(e), 400)
        except StoreError:
            logger.exception("Could not build attendance report")
            return json_error("Could not load report", 503)

        return jsonify({
            "success": True,
            "start": data.date_range.start.isoformat(),
            "end": data.date_range.end.isoformat(),
            "total_days": data.total_days,
            "summary": data.summary,
            "rows": page.items,
            "page": page.page,
            "per_page": page.per_page,
            "total": page.total,
            "total_pages": page.total_pages,
            "caption": page.caption(),
        })

    @app.route("/api/reports.csv", methods=["GET"], endpoint="attendance_report_csv")
    @login_required
    def attendance_report_csv():
        try:
            data = _load_report()
        except ValidationError as e:
            return json_error(str(e), 400)
        except StoreError:
            logger.exception("Could not export attendance report")
            return json_error("Could not export report", 503)

        start, end = data.date_range.start, data.date_range.end
        filename = f"attendance_report_{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}.csv"
        return _write_report_csv(data=data, filename=filename)
