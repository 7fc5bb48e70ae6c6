# Application Package
from .daily import daily_stats, group_by_effective_date
from .dates import add_days, format_relative_label, start_of_day
from .intervals import interval_for_stage
from .scheduler import complete_review, log_item, project_schedule, time_split
from .service import StudyService

__all__ = [
    "StudyService",
    "add_days",
    "complete_review",
    "daily_stats",
    "format_relative_label",
    "group_by_effective_date",
    "interval_for_stage",
    "log_item",
    "project_schedule",
    "start_of_day",
    "time_split",
]
