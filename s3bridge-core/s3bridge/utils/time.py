import datetime
from typing import Optional
from zoneinfo import ZoneInfo

RFC1123 = "%a, %d %b %Y %H:%M:%S GMT"

_gmt_zone_info = ZoneInfo("GMT")


def str_to_rfc_1123_datetime(value: str) -> datetime.datetime:
    return datetime.datetime.strptime(value, RFC1123).replace(tzinfo=_gmt_zone_info)


def iso_8601_datetime_with_milliseconds(value: Optional[datetime.datetime]) -> Optional[str]:
    """Format the datetime like ``2012-12-23T00:00:00.000Z``, the way S3 renders timestamps in its documents."""
    if not value:
        return None
    if value.tzinfo:
        value = value.astimezone(datetime.timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
