"""Usage statistics aggregation

Usage is stored per link as a mapping of day bucket keys (unix timestamp of
a UTC midnight, as a string) to visit counts. Days without visits are absent.

Functions:
    aggregate_usage(usage, now=None) -> UsageStatisticsModel
        Roll raw day buckets up into last day / last week / all time totals.

Example:
    >>> from shortie.utils.statistics import aggregate_usage
    >>> aggregate_usage({'1730678400': 3}, now=datetime(2024, 11, 4, 12, tzinfo=UTC))
    UsageStatisticsModel(last_day=3, last_week=3, all_time=3)
"""

from datetime import datetime, timedelta

from shortie.constants import UsageTracking
from shortie.models import UsageStatisticsModel
from shortie.utils.helpers import beginning_of_day, day_bucket_key


def aggregate_usage(usage: dict[str, int], now: datetime | None = None) -> UsageStatisticsModel:
    """Aggregate a raw day-bucket usage mapping.

    Args:
        usage (dict[str, int]):
            Visits per day bucket key.
        now (datetime | None):
            The current instant. Defaults to now (UTC).

    Returns:
        UsageStatisticsModel:
            last_day:  visits in today's bucket.
            last_week: visits in today's bucket and the 6 buckets before it.
                       Older buckets are excluded even if present.
            all_time:  visits across every bucket, regardless of age.
    """
    today = beginning_of_day(now)
    week = [day_bucket_key(today - timedelta(days=offset)) for offset in range(UsageTracking.DAYS_IN_WEEK)]

    return UsageStatisticsModel(
        last_day=int(usage.get(week[0], 0)),
        last_week=sum(int(usage.get(bucket, 0)) for bucket in week),
        all_time=sum(int(count) for count in usage.values()),
    )
