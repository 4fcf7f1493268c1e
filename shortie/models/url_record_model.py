from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class URLRecordModel:
    """Represent a persisted short URL mapping.

    Attributes:
        shortcode (str):
            The unique short identifier, derived from the target URL.
        target (str):
            The original long URL the shortcode redirects to. Stored verbatim.
        expiration (int):
            Unix timestamp (seconds) after which the link expires.
            0 means the link never expires.
        usage (dict[str, int]):
            Visits per UTC day, keyed by the day bucket key
            (unix timestamp of the day's UTC midnight, as a string).
            A missing key means no visits on that day.

    Example:
        >>> record = URLRecordModel(shortcode='4e24c46962', target='https://example.com/data/hi')
        >>> record.with_hit('1730678400').usage
        {'1730678400': 1}
        >>> record.to_document()
        {'id': '4e24c46962', 'url': 'https://example.com/data/hi', 'expiration': 0, 'usage': {}}
    """

    shortcode: str
    target: str
    expiration: int = 0
    usage: dict[str, int] = field(default_factory=dict)

    def with_hit(self, bucket: str) -> 'URLRecordModel':
        """Return a copy of the record with one more visit in `bucket`."""
        usage = dict(self.usage)
        usage[bucket] = usage.get(bucket, 0) + 1
        return replace(self, usage=usage)

    def to_document(self) -> dict[str, Any]:
        """Render the record in its persisted shape."""
        return {
            'id': self.shortcode,
            'url': self.target,
            'expiration': self.expiration,
            'usage': dict(self.usage),
        }

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> 'URLRecordModel':
        """Build a record from its persisted shape.

        Data stores hand numbers back in their own types (e.g. Decimal from DynamoDB),
        so numeric fields are coerced to int. A missing usage mapping reads as empty.

        Raises:
            KeyError: If `id` or `url` is missing.
            ValueError / TypeError: If a numeric field can't be read as an integer.
        """
        usage = document.get('usage') or {}
        return cls(
            shortcode=document['id'],
            target=document['url'],
            expiration=int(document.get('expiration') or 0),
            usage={str(bucket): int(count) for bucket, count in usage.items()},
        )
