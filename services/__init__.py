from services.report_service import (
    report_lines,
    render_report,
    build_report_pdf,
    export_report,
    report_filename,
)

__all__ = ["report_lines", "render_report", "build_report_pdf", "export_report", "report_filename"]
