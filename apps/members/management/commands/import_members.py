"""
Management command to import church members from a CSV file.

The header row is matched case-insensitively. The church directory export
columns (First Name, Last Name, Email, Mobile Phone Number) are understood
as well as the plain field names (first_name, last_name, email, phone,
is_visitor, external_id, external_system).

Usage:
    python manage.py import_members ORG1 members.csv
    python manage.py import_members ORG1 pco.csv --external-system PLANNING_CENTER
"""

import csv

from django.core.management.base import BaseCommand, CommandError

from apps.churches.models import Church
from apps.members.services import import_members

HEADER_ALIASES = {
    'first name': 'first_name',
    'last name': 'last_name',
    'email': 'email',
    'mobile phone number': 'phone',
    'phone': 'phone',
    'visitor': 'is_visitor',
    'external id': 'external_id',
    'external system': 'external_system',
}


def normalize_header(header):
    key = (header or '').strip().lower()
    return HEADER_ALIASES.get(key) or HEADER_ALIASES.get(key.replace('_', ' ')) or key


class Command(BaseCommand):
    help = 'Create or update church members from a CSV file'

    def add_arguments(self, parser):
        parser.add_argument('church_id', help='ID of the church receiving the members')
        parser.add_argument('csv_path', help='Path to the CSV file')
        parser.add_argument(
            '--external-system',
            default='',
            help='Tag rows without an external_system column with this system name',
        )

    def handle(self, *args, **options):
        church_id = options['church_id']
        external_system = options['external_system']

        if not Church.objects.filter(id=church_id).exists():
            raise CommandError(f"Church '{church_id}' does not exist")

        try:
            with open(options['csv_path'], newline='', encoding='utf-8-sig') as f:
                reader = csv.DictReader(f)
                if not reader.fieldnames:
                    raise CommandError('CSV file has no header row')
                rows = []
                for raw in reader:
                    row = {normalize_header(k): v for k, v in raw.items() if k is not None}
                    if external_system and not row.get('external_system'):
                        row['external_system'] = external_system
                    rows.append(row)
        except OSError as e:
            raise CommandError(f"Cannot read {options['csv_path']}: {e}")

        result = import_members(church_id=church_id, rows=rows)

        for error in result.errors:
            self.stderr.write(self.style.ERROR(error))

        self.stdout.write(self.style.SUCCESS(
            f'{result.created} created, {result.updated} updated, '
            f'{result.skipped} skipped, {result.failed} failed'
        ))
