"""XML record adapter reading `record` attributes under a `records` root."""

from __future__ import annotations

import html.entities
import re
import xml.etree.ElementTree as element_tree
from typing import Final

from statement_validator.domain import RawFieldMap
from statement_validator.logging_setup import logging_get_logger

from .interfaces import RecordAdapterPort
from .record_errors import RecordParseError

LOGGER = logging_get_logger(__name__)

XML_RECORDS_TAG: Final[str] = "records"
XML_RECORD_TAG: Final[str] = "record"

_XML_PREDEFINED_ENTITIES: Final[frozenset[str]] = frozenset({"amp", "lt", "gt", "quot", "apos"})
_XML_NAMED_ENTITY_PATTERN = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")


class XmlRecordAdapter(RecordAdapterPort):
    """Attribute-driven XML adapter.

    Expected shape::

        <records>
          <record reference="1" accountNumber="..." ... />
        </records>

    Only attributes of direct `record` children are read. A different root, a
    root without `record` children or a blank document yields zero records.
    """

    _FORMAT_NAME = "xml"

    def adapter_format_name(self) -> str:
        return self._FORMAT_NAME

    def adapter_reference_first(self) -> bool:
        return True

    def adapter_parse_records(self, raw_text: str) -> list[RawFieldMap]:
        """Parse XML text into raw field maps built from `record` attributes.

        Args:
            raw_text: Decoded XML content.

        Returns:
            list[RawFieldMap]: Raw field maps in document order.

        Raises:
            RecordParseError: Raised when the document is not well-formed XML.
        """

        if not raw_text.strip():
            return []

        try:
            root = element_tree.fromstring(_xml_resolve_html_entities(raw_text))
        except element_tree.ParseError as error:
            raise RecordParseError(f"XML content could not be parsed: {error}") from error

        if root.tag != XML_RECORDS_TAG:
            LOGGER.debug("XML root <%s> is not <%s>; treating document as empty", root.tag, XML_RECORDS_TAG)
            return []

        records: list[RawFieldMap] = [
            dict(record_element.attrib) for record_element in root if record_element.tag == XML_RECORD_TAG
        ]
        LOGGER.debug("Parsed %d XML record(s)", len(records))
        return records


def _xml_resolve_html_entities(raw_text: str) -> str:
    """Rewrite HTML named entities as numeric character references.

    The XML parser only knows the five predefined entities; this lets values
    such as `&eacute;` or `&nbsp;` decode instead of failing the whole document.

    Args:
        raw_text: Raw XML text.

    Returns:
        str: XML text safe for the standard parser.
    """

    def _replace(match: re.Match[str]) -> str:
        entity_name = match.group(1)
        if entity_name in _XML_PREDEFINED_ENTITIES:
            return match.group(0)
        codepoint = html.entities.name2codepoint.get(entity_name)
        if codepoint is None:
            return match.group(0)
        return f"&#{codepoint};"

    return _XML_NAMED_ENTITY_PATTERN.sub(_replace, raw_text)
