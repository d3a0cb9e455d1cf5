from typing import Any, Iterable, Optional
from xml.parsers.expat import ExpatError

import xmltodict


class XmlDecodeError(ValueError):
    """Raised when a document is not well-formed XML."""


def strip_xmlns(obj: Any) -> Any:
    """Strip xmlns attributes from a dict returned by xmltodict.parse."""
    if isinstance(obj, list):
        return [strip_xmlns(item) for item in obj]
    if isinstance(obj, dict):
        # Remove xmlns attribute.
        obj.pop("@xmlns", None)
        if len(obj) == 1 and "#text" in obj:
            # If the only remaining key is the #text key, elide the dict
            # entirely, to match the structure that xmltodict.parse would have
            # returned if the xmlns namespace hadn't been present.
            return obj["#text"]
        return {k: strip_xmlns(v) for k, v in obj.items()}
    return obj


def parse_xml(document: str, force_list: Optional[Iterable[str]] = None) -> dict:
    """
    Parse the given XML document into a dict (see ``xmltodict.parse``), with namespace attributes stripped.

    :param document: the XML document
    :param force_list: element names which are always returned as a list, even if they appear only once
    :return: the parsed document, keyed by its root element
    :raises XmlDecodeError: if the document is empty or not well-formed
    """
    if not document or not document.strip():
        raise XmlDecodeError("empty document")
    try:
        parsed = xmltodict.parse(document, force_list=tuple(force_list) if force_list else None)
    except ExpatError as e:
        raise XmlDecodeError(str(e)) from e
    return strip_xmlns(parsed)
