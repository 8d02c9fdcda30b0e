from analytics.models import AnalysisReport, Bucket
from utils.functions import format_duration, get_downtime_severity


def format_text_report(report: AnalysisReport) -> str:
    """
    Formats the availability report as plain text.

    Args:
        report (AnalysisReport): Asset availability report.

    Returns:
        str: Report text with a summary and a per-period chart.
    """
    period = report.analysis_period
    text = "Asset availability report\n\n"
    text += f"Asset: {report.asset_name} ({report.asset_id})\n"
    if report.department:
        text += f"Department: {report.department}\n"
    text += f"Period: {period.start_date.strftime('%d.%m.%Y')} "\
        f"- {period.end_date.strftime('%d.%m.%Y')} ({period.total_days} days)\n\n"

    summary = report.summary
    text += "Summary:\n"
    text += f"- Availability: {summary.overall_availability}%\n"
    text += f"- Incidents: {summary.total_incidents}\n"
    text += f"- Downtime: {format_duration(summary.total_downtime_minutes)}\n"

    if summary.total_downtime_minutes > 0:
        text += f"- Planned: {format_duration(summary.planned_downtime_minutes)}\n"
        text += f"- Unplanned: {format_duration(summary.unplanned_downtime_minutes)}\n"

    if summary.total_incidents > 0:
        text += f"- MTBF: {format_duration(report.reliability.mtbf_minutes)}\n"
        text += f"- MTTR: {format_duration(report.reliability.mttr_minutes)}\n"

    if summary.raw_total_downtime_minutes > summary.total_downtime_minutes:
        text += f"- Logged downtime exceeds period length in {report.diagnostics.clamped_buckets} period(s): "\
            f"{format_duration(summary.raw_total_downtime_minutes)} logged\n"

    if report.diagnostics.overlap_minutes > 0:
        text += f"- Overlapping incidents: {format_duration(report.diagnostics.overlap_minutes)} counted more than once\n"

    if summary.dropped_records:
        text += f"- Records without downtime: {summary.dropped_records}\n"

    text += "\nAvailability by period:\n"
    text += _create_text_chart(report.series)

    return text


def _create_text_chart(series: list[Bucket]) -> str:
    """
    Creates a text graph of the availability of each period.

    Args:
        series (list[Bucket]): Buckets of the report.

    Returns:
        str: visual text form of the graph.
    """
    chart = "\n"

    for bucket in series:
        if bucket.days == 1:
            label = bucket.period_start.strftime("%d.%m")
        else:
            label = f"{bucket.period_start.strftime('%d.%m')}-{bucket.period_end.strftime('%d.%m')}"
        availability = bucket.availability_pct

        filled_count = int(availability // 10)
        empty_count = 10 - filled_count

        chart += (
            f"{label}: "
            f"{'#' * filled_count}{'.' * empty_count} "
            f"{availability}%"
        )
        if bucket.downtime_minutes > 0:
            chart += f" ({format_duration(bucket.downtime_minutes)}, "\
                f"{get_downtime_severity(bucket.downtime_minutes).value})"
        chart += "\n"

    return chart
