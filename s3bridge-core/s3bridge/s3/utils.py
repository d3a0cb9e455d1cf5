import logging
import re
from typing import Optional

from s3bridge.api.s3 import ETag, Expiration
from s3bridge.utils.time import iso_8601_datetime_with_milliseconds, str_to_rfc_1123_datetime

LOG = logging.getLogger(__name__)

# x-amz-expiration: expiry-date="Fri, 23 Dec 2012 00:00:00 GMT", rule-id="1"
REGEX_EXPIRY_DATE = re.compile(r'expiry-date="(.*?)",')
REGEX_RULE_ID = re.compile(r'rule-id="(.*?)"')


def strip_etag_quotes(etag: Optional[str]) -> Optional[ETag]:
    """The storage service wraps ETags in double quotes, which are removed before handing them out."""
    if etag is None:
        return None
    return etag.strip('"')


def parse_expiration_header(expiration_header: Optional[str]) -> Optional[Expiration]:
    """
    Extracts the expiry date and the rule id from an ``x-amz-expiration`` header. The date is returned as ISO 8601
    timestamp. Both values have to be present and valid, otherwise nothing is returned.

    :param expiration_header: the header value, like ``expiry-date="Fri, 23 Dec 2012 00:00:00 GMT", rule-id="1"``
    :return: a dict with ``expiry-date`` and ``rule-id``, or None
    """
    if not expiration_header:
        return None

    expiry_date = None
    if match := REGEX_EXPIRY_DATE.search(expiration_header):
        try:
            expiry_date = iso_8601_datetime_with_milliseconds(str_to_rfc_1123_datetime(match.group(1)))
        except ValueError:
            LOG.debug("invalid expiry-date in expiration header: %s", expiration_header)

    rule_id = None
    if match := REGEX_RULE_ID.search(expiration_header):
        rule_id = match.group(1)

    if expiry_date and rule_id:
        return {"expiry-date": expiry_date, "rule-id": rule_id}
    return None
