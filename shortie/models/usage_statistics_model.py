from dataclasses import dataclass


# fmt: off
@dataclass(frozen=True)
class UsageStatisticsModel:
    last_day: int = 0   # Visits during the current UTC day
    last_week: int = 0  # Visits during the trailing week window (today and the 6 days before)
    all_time: int = 0   # Visits across every recorded day

    def to_dict(self) -> dict[str, int]:
        return {
            'lastDay': self.last_day,
            'lastWeek': self.last_week,
            'allTime': self.all_time,
        }
# fmt: on
