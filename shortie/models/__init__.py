from shortie.models.url_record_model import URLRecordModel
from shortie.models.usage_statistics_model import UsageStatisticsModel


__all__ = [
    'URLRecordModel',
    'UsageStatisticsModel',
]
