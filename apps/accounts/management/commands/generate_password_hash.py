"""
Management command to generate a password hash for the users table.

Useful when seeding or repairing staff accounts directly in the database.

Usage:
    python manage.py generate_password_hash --password 'Password123!'
    python manage.py generate_password_hash --hasher scrypt
"""

import getpass

from django.contrib.auth.hashers import get_hashers_by_algorithm, make_password
from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = 'Print a password hash usable in the users.password column'

    def add_arguments(self, parser):
        parser.add_argument(
            '--password',
            help='Password to hash. Prompted for when omitted.',
        )
        parser.add_argument(
            '--hasher',
            default='default',
            help='Hasher algorithm name (e.g. scrypt, pbkdf2_sha256). Defaults to the first configured hasher.',
        )

    def handle(self, *args, **options):
        password = options['password']
        hasher = options['hasher']

        if hasher != 'default' and hasher not in get_hashers_by_algorithm():
            available = ', '.join(sorted(get_hashers_by_algorithm()))
            raise CommandError(f"Unknown hasher '{hasher}'. Available: {available}")

        if password is None:
            password = getpass.getpass('Password: ')
            if password != getpass.getpass('Password (again): '):
                raise CommandError('Passwords do not match')

        if not password:
            raise CommandError('Password must not be empty')

        encoded = make_password(password, hasher=hasher)

        if options['verbosity'] > 1:
            algorithm = encoded.split('$', 1)[0]
            self.stderr.write(f'Hashed with {algorithm}')

        self.stdout.write(encoded)
