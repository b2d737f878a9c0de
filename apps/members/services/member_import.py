"""
Bulk member import.

Rows come from a CSV export or an external directory (Planning Center).
An incoming row is matched to an existing member of the church by email
first, then by (external_system, external_id). Matches are updated,
everything else with both names is created.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping

from django.db import DatabaseError, transaction

from apps.members.models import Member

logger = logging.getLogger(__name__)

IMPORT_FIELDS = (
    'first_name',
    'last_name',
    'email',
    'phone',
    'is_visitor',
    'external_id',
    'external_system',
)

TRUE_VALUES = {'1', 'true', 'yes', 'y'}


@dataclass
class ImportResult:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def imported(self):
        return self.created + self.updated


def _clean(row: Mapping) -> dict:
    data = {}
    for name in IMPORT_FIELDS:
        value = row.get(name)
        if name == 'is_visitor':
            if isinstance(value, str):
                value = value.strip().lower() in TRUE_VALUES
            data[name] = bool(value)
        else:
            data[name] = (value or '').strip()
    data['email'] = data['email'].lower()
    return data


def _merge(member: Member, data: dict, names: tuple) -> None:
    """Copy incoming values onto ``member``; blanks keep the stored value."""
    changed = []
    for name in names:
        if data[name] and data[name] != getattr(member, name):
            setattr(member, name, data[name])
            changed.append(name)
    if changed:
        member.save(update_fields=changed + ['updated_at'])


def _import_row(church_id: str, data: dict) -> str:
    if data['email']:
        existing = (
            Member.objects
            .select_for_update()
            .filter(church_id=church_id, email__iexact=data['email'])
            .order_by('id')
            .first()
        )
        if existing is not None:
            _merge(existing, data, ('first_name', 'last_name', 'phone', 'external_id', 'external_system'))
            return 'updated'

    if data['external_id'] and data['external_system']:
        existing = (
            Member.objects
            .select_for_update()
            .filter(
                church_id=church_id,
                external_id=data['external_id'],
                external_system=data['external_system'],
            )
            .order_by('id')
            .first()
        )
        if existing is not None:
            _merge(existing, data, ('first_name', 'last_name', 'email', 'phone'))
            return 'updated'

    if not (data['first_name'] and data['last_name']):
        return 'skipped'

    Member.objects.create(church_id=church_id, **data)
    return 'created'


def import_members(*, church_id: str, rows: Iterable[Mapping]) -> ImportResult:
    """
    Create or update members of a church from a batch of rows.

    Args:
        church_id: ID of the church receiving the members
        rows: Mappings keyed by first_name, last_name, email, phone,
            is_visitor, external_id, external_system (missing keys are blank)

    Returns:
        ImportResult with per-outcome counters. A row whose email already
        appeared earlier in the batch is skipped. A row that fails to save
        is rolled back on its own and recorded in ``errors``; the rest of
        the batch still goes in.
    """
    if not church_id:
        raise ValueError('church_id is required')

    result = ImportResult()
    seen_emails = set()

    for position, row in enumerate(rows, start=1):
        data = _clean(row)

        if data['email']:
            if data['email'] in seen_emails:
                logger.info(f"Skipping duplicate email in batch: {data['email']}")
                result.skipped += 1
                continue
            seen_emails.add(data['email'])

        try:
            with transaction.atomic():
                outcome = _import_row(church_id, data)
        except DatabaseError as e:
            logger.exception(f"Failed to import row {position} for church {church_id}")
            result.failed += 1
            result.errors.append(f"Row {position}: {e}")
            continue

        setattr(result, outcome, getattr(result, outcome) + 1)

    logger.info(
        f"Imported members into church {church_id}: "
        f"{result.created} created, {result.updated} updated, "
        f"{result.skipped} skipped, {result.failed} failed"
    )
    return result
