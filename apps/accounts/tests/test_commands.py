from io import StringIO

import pytest
from unittest.mock import patch
from django.contrib.auth.hashers import check_password
from django.core.management import call_command
from django.core.management.base import CommandError


class TestGeneratePasswordHash:
    """Tests for the generate_password_hash management command."""

    def test_hash_verifies(self):
        out = StringIO()
        call_command('generate_password_hash', '--password', 'Password123!', stdout=out)

        encoded = out.getvalue().strip()
        assert check_password('Password123!', encoded)
        assert not check_password('Test1234', encoded)

    def test_hashes_are_salted(self):
        first, second = StringIO(), StringIO()
        call_command('generate_password_hash', '--password', 'Test1234', stdout=first)
        call_command('generate_password_hash', '--password', 'Test1234', stdout=second)

        assert first.getvalue() != second.getvalue()

    def test_prompts_when_password_missing(self):
        out = StringIO()
        with patch('apps.accounts.management.commands.generate_password_hash.getpass.getpass',
                   side_effect=['Prompted1!', 'Prompted1!']):
            call_command('generate_password_hash', stdout=out)

        assert check_password('Prompted1!', out.getvalue().strip())

    def test_prompt_mismatch_fails(self):
        with patch('apps.accounts.management.commands.generate_password_hash.getpass.getpass',
                   side_effect=['one', 'two']):
            with pytest.raises(CommandError, match='do not match'):
                call_command('generate_password_hash', stdout=StringIO())

    def test_unknown_hasher_fails(self):
        with pytest.raises(CommandError, match='Unknown hasher'):
            call_command('generate_password_hash', '--password', 'x', '--hasher', 'rot13', stdout=StringIO())

    def test_empty_password_fails(self):
        with pytest.raises(CommandError):
            call_command('generate_password_hash', '--password', '', stdout=StringIO())
