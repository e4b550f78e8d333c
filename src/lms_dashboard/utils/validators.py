"""Record lookup for the CLI.

Server ids are long (cuid/uuid), so commands accept any unique prefix of a
listed record's `api_id`.
"""

from typing import Any, Sequence


class AmbiguousRecordIdError(Exception):
    """Raised when an id prefix matches multiple records."""

    def __init__(self, prefix: str, candidates: list[str]):
        self.prefix = prefix
        self.candidates = candidates
        super().__init__(
            f"Id prefix '{prefix}' is ambiguous. Candidates:\n"
            + "\n".join(f"  - {c}" for c in candidates)
        )


class RecordNotFoundError(Exception):
    """Raised when no record matches the given prefix."""

    def __init__(self, prefix: str):
        self.prefix = prefix
        super().__init__(f"No record found with id prefix '{prefix}'")


def describe_record(record: Any) -> str:
    """`api_id` followed by the record's name or title, if it has one."""
    label = getattr(record, "name", None) or getattr(record, "title", None)
    return f"{record.api_id} ({label})" if label else record.api_id


def find_record(prefix: str, records: Sequence[Any]) -> Any:
    """Return the record whose `api_id` equals or uniquely starts with `prefix`.

    Raises:
        RecordNotFoundError: Blank prefix, or no record matches
        AmbiguousRecordIdError: Several records match and none exactly
    """
    prefix = prefix.strip()
    if not prefix:
        raise RecordNotFoundError(prefix)

    matches = []
    for record in records:
        if record.api_id == prefix:
            return record
        if record.api_id.startswith(prefix):
            matches.append(record)

    if not matches:
        raise RecordNotFoundError(prefix)
    if len(matches) > 1:
        raise AmbiguousRecordIdError(prefix, [describe_record(r) for r in matches])
    return matches[0]
