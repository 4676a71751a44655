"""Column types shared by the Hereoz models."""

import uuid
from typing import Iterable, List, Optional

from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.types import CHAR, JSON, TypeDecorator


def clean_string_list(values: Optional[Iterable[str]]) -> Optional[List[str]]:
    """Strip entries, drop blanks and case-insensitive duplicates, keep order.

    None passes through so partial updates can tell "absent" from "empty".
    """
    if values is None:
        return None
    cleaned: List[str] = []
    seen = set()
    for value in values:
        value = (value or "").strip()
        if value and value.lower() not in seen:
            seen.add(value.lower())
            cleaned.append(value)
    return cleaned


class GUID(TypeDecorator):
    """UUID column: native UUID on PostgreSQL, CHAR(36) text elsewhere."""

    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "postgresql":
            return dialect.type_descriptor(UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if not isinstance(value, uuid.UUID):
            value = uuid.UUID(str(value))
        return value if dialect.name == "postgresql" else str(value)

    def process_result_value(self, value, dialect):
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))


class StringList(TypeDecorator):
    """JSON array of labels such as skills or languages.

    Values are cleaned on the way in; a NULL column reads back as [].
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return clean_string_list(value)

    def process_result_value(self, value, dialect):
        return list(value) if value else []
