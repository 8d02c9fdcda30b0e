import argparse
import asyncio
import sys

from analytics.service import AssetAnalyticsService
from analytics.text_report import format_text_report
from exceptions import AnalyticsException
from utils.enums import Granularity, Preset


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Downtime and availability report of a facility asset")
    parser.add_argument("asset_id", help="id of the asset")
    parser.add_argument(
        "--preset",
        choices=[preset.value for preset in Preset],
        help="named analysis window, defaults to the last 30 days",
    )
    parser.add_argument("--start-date", help="first day of a custom window, YYYY-MM-DD")
    parser.add_argument("--end-date", help="last day of a custom window, YYYY-MM-DD")
    parser.add_argument(
        "--period",
        choices=[granularity.value for granularity in Granularity],
        help="size of the reporting periods, defaults to day",
    )
    parser.add_argument("--json", action="store_true", help="print the report as JSON")
    return parser


async def run(args: argparse.Namespace) -> str:
    report = await AssetAnalyticsService().generate_report(
        args.asset_id,
        preset=args.preset,
        start_date=args.start_date,
        end_date=args.end_date,
        period=args.period,
    )
    if args.json:
        return report.to_json(indent=2)
    return format_text_report(report)


def main() -> int:
    args = build_parser().parse_args()
    try:
        print(asyncio.run(run(args)))
    except AnalyticsException as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
