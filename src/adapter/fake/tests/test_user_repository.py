"""Unit tests for FakeUserRepository: verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.user import User


def _user(login_name: str = 'alice', **overrides) -> User:
    return User(
        login_name=login_name,
        email_address=f'{login_name}@example.com',
        first_name='First',
        last_name='Last',
        **overrides,
    )


class TestFakeUserRepository(unittest.TestCase):
    """Tests that FakeUserRepository correctly implements UserRepository Protocol."""

    def setUp(self):
        self.repo = FakeUserRepository()

    # ── upsert (insert) ───────────────────────────────────────

    def test_insert_assigns_increasing_ids(self):
        first = self.repo.upsert(_user('alice'))
        second = self.repo.upsert(_user('bob'))

        self.assertEqual(first.id, 1)
        self.assertEqual(second.id, 2)

    def test_insert_sets_timestamps(self):
        user = self.repo.upsert(_user())

        self.assertIsNotNone(user.created_at)
        self.assertEqual(user.created_at, user.updated_at)
        self.assertIsNotNone(user.created_at.tzinfo)

    def test_insert_duplicate_login_name(self):
        self.repo.upsert(_user('alice'))

        with self.assertRaises(DuplicateError):
            self.repo.upsert(_user('alice'))
        self.assertEqual(len(self.repo.store), 1)

    # ── upsert (update) ───────────────────────────────────────

    def test_update_preserves_created_at(self):
        user = self.repo.upsert(_user())
        updated = self.repo.upsert(user.with_changes(first_name='Changed', created_at=None))

        self.assertEqual(updated.created_at, user.created_at)
        self.assertGreaterEqual(updated.updated_at, user.updated_at)
        self.assertEqual(self.repo.get_by_id(user.id).first_name, 'Changed')

    def test_update_missing_id(self):
        with self.assertRaises(NotFoundError):
            self.repo.upsert(_user(id=99))
        self.assertEqual(self.repo.store, {})

    def test_update_to_other_users_login_name(self):
        self.repo.upsert(_user('alice'))
        bob = self.repo.upsert(_user('bob'))

        with self.assertRaises(DuplicateError):
            self.repo.upsert(bob.with_changes(login_name='alice'))
        self.assertEqual(self.repo.get_by_id(bob.id), bob)

    # ── reads ─────────────────────────────────────────────────

    def test_get_by_login_name(self):
        alice = self.repo.upsert(_user('alice'))

        self.assertEqual(self.repo.get_by_login_name('alice'), alice)

    def test_get_by_login_name_missing(self):
        with self.assertRaises(NotFoundError):
            self.repo.get_by_login_name('nobody')

    def test_get_by_id_missing(self):
        with self.assertRaises(NotFoundError):
            self.repo.get_by_id(1)

    # ── delete / clear ────────────────────────────────────────

    def test_delete(self):
        user = self.repo.upsert(_user())

        self.repo.delete(user.id)

        self.assertEqual(self.repo.get_all(), [])
        with self.assertRaises(NotFoundError):
            self.repo.delete(user.id)

    def test_clear(self):
        self.repo.upsert(_user('alice'))
        self.repo.upsert(_user('bob'))

        self.repo.clear()

        self.assertEqual(self.repo.get_all(), [])


if __name__ == '__main__':
    unittest.main()
