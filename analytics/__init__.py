from analytics.assembler import compute_asset_analytics
from analytics.date_range import resolve_date_range
from analytics.models import AnalysisReport, DateRange
