"""Calendar aggregation and month-grid engine for the campaign console."""

from .bucketer import DayBucket, bucket_records
from .drilldown import DaySummary, select, summarize
from .grid import DayCell, InvalidMonth, MonthGrid, build_month_grid
from .navigator import Navigator, NavigatorState
from .records import MATCH_ALL, CalendarRecord, MatchAll, MatchEntity

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CalendarRecord",
    "DayBucket",
    "DayCell",
    "DaySummary",
    "InvalidMonth",
    "MATCH_ALL",
    "MatchAll",
    "MatchEntity",
    "MonthGrid",
    "Navigator",
    "NavigatorState",
    "bucket_records",
    "build_month_grid",
    "select",
    "summarize",
]
