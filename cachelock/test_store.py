#!/usr/bin/env python
import unittest
from datetime import timedelta

from mock import Mock

from cachelock.key import LockKey
from cachelock.store import CacheLockStore
from cachelock.exceptions import InvalidArgumentError, LockConflictedError, NotSupportedError

class CacheLockStoreTest(unittest.TestCase):

    def setUp(self):
        self.pool  = Mock()
        self.store = CacheLockStore(self.pool)

    def owned_key(self, token='some-token'):
        key = LockKey('foo')
        key.set_state(CacheLockStore.state_namespace, token)
        return key

    def test_init_default_ttl(self):
        self.assertEqual(self.store.initial_ttl, 300)

    def test_init_accepts_timedelta(self):
        store = CacheLockStore(self.pool, initial_ttl=timedelta(seconds=30))
        self.assertEqual(store.initial_ttl, 30)

    def test_init_invalid_ttl(self):
        for ttl in (-1, 0, 0.5):
            self.assertRaises(InvalidArgumentError, CacheLockStore, self.pool, ttl)
        self.assertFalse(self.pool.method_calls)

    def test_save_puts_off_expiration_if_item_exists(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'another-token'
        self.pool.get_item.return_value = item

        self.assertRaises(LockConflictedError, self.store.save, self.owned_key())
        self.assertEqual(self.pool.get_item.call_count, 2)
        self.pool.get_item.assert_called_with('foo')
        self.assertEqual(item.is_miss.call_count, 2)
        item.set.assert_not_called()
        item.save.assert_not_called()

    def test_save_puts_off_expiration_if_save_fails(self):
        item = Mock()
        item.is_miss.return_value = True
        item.save.return_value = False
        self.pool.get_item.return_value = item

        self.assertRaises(LockConflictedError, self.store.save, self.owned_key())
        self.assertEqual(self.pool.get_item.call_count, 2)
        self.assertEqual(item.set.call_count, 2)
        item.set.assert_called_with('some-token')
        item.set_ttl.assert_called_once_with(300)
        self.assertEqual(item.save.call_count, 2)

    def test_save_returns_upon_success(self):
        item = Mock()
        item.is_miss.return_value = True
        item.save.return_value = True
        self.pool.get_item.return_value = item

        self.store.save(self.owned_key())
        self.pool.get_item.assert_called_once_with('foo')
        item.set.assert_called_once_with('some-token')
        item.set_ttl.assert_not_called()
        item.save.assert_called_once_with()

    def test_save_renews_own_lock(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'some-token'
        item.save.return_value = True
        self.pool.get_item.return_value = item

        self.store.save(self.owned_key())
        item.set.assert_called_once_with('some-token')
        item.set_ttl.assert_called_once_with(300)

    def test_save_after_lost_race_renews_with_same_token(self):
        ''' A caller losing the creation race is treated exactly like
        the owner extending its lock: if the winner wrote the same
        token, the renewal succeeds.
        '''
        missed, present = Mock(), Mock()
        missed.is_miss.return_value = True
        missed.save.return_value = False
        present.is_miss.return_value = False
        present.get.return_value = 'some-token'
        present.save.return_value = True
        self.pool.get_item.side_effect = [missed, present]

        self.store.save(self.owned_key())
        present.set_ttl.assert_called_once_with(300)
        present.save.assert_called_once_with()

    def test_wait_and_save_is_not_supported(self):
        self.assertRaises(NotSupportedError, self.store.wait_and_save, LockKey('foo'))
        self.assertFalse(self.pool.method_calls)

    def test_put_off_expiration_invalid_ttl(self):
        for ttl in (-1, 0, 0.99, timedelta(0)):
            self.assertRaises(InvalidArgumentError, self.store.put_off_expiration, LockKey('foo'), ttl)
        self.assertFalse(self.pool.method_calls)

    def test_put_off_expiration_item_exists_with_other_token(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'another-token'
        self.pool.get_item.return_value = item

        self.assertRaises(LockConflictedError, self.store.put_off_expiration, self.owned_key(), 10)
        self.pool.get_item.assert_called_once_with('foo')
        item.set.assert_not_called()
        item.save.assert_not_called()

    def test_put_off_expiration_item_save_fails(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'some-token'
        item.save.return_value = False
        self.pool.get_item.return_value = item

        self.assertRaises(LockConflictedError, self.store.put_off_expiration, self.owned_key(), 10)
        item.set.assert_called_once_with('some-token')
        item.set_ttl.assert_called_once_with(10)
        item.save.assert_called_once_with()

    def test_put_off_expiration_extends_item(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'some-token'
        item.save.return_value = True
        self.pool.get_item.return_value = item

        self.store.put_off_expiration(self.owned_key(), 10)
        item.set.assert_called_once_with('some-token')
        item.set_ttl.assert_called_once_with(10)

    def test_put_off_expiration_rounds_ttl_up(self):
        item = Mock()
        item.is_miss.return_value = True
        item.save.return_value = True
        self.pool.get_item.return_value = item

        self.store.put_off_expiration(self.owned_key(), 1.2)
        item.set_ttl.assert_called_once_with(2)

    def test_delete_does_nothing_if_item_does_not_exist(self):
        item = Mock()
        item.is_miss.return_value = True
        self.pool.get_item.return_value = item

        self.store.delete(self.owned_key())
        self.pool.get_item.assert_called_once_with('foo')
        self.pool.delete_item.assert_not_called()

    def test_delete_does_nothing_if_item_is_not_owned(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'another-token'
        self.pool.get_item.return_value = item

        self.store.delete(self.owned_key())
        self.pool.delete_item.assert_not_called()

    def test_delete_deletes_item(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'some-token'
        self.pool.get_item.return_value = item

        self.store.delete(self.owned_key())
        self.pool.delete_item.assert_called_once_with('foo')

    def test_exists_false_if_item_does_not_exist(self):
        item = Mock()
        item.is_miss.return_value = True
        self.pool.get_item.return_value = item

        self.assertFalse(self.store.exists(LockKey('foo')))
        self.pool.get_item.assert_called_once_with('foo')

    def test_exists_false_if_item_is_not_owned(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'another-token'
        self.pool.get_item.return_value = item

        self.assertFalse(self.store.exists(self.owned_key()))

    def test_exists_true_if_item_is_owned(self):
        item = Mock()
        item.is_miss.return_value = False
        item.get.return_value = 'some-token'
        self.pool.get_item.return_value = item

        self.assertTrue(self.store.exists(self.owned_key()))
        item.set.assert_not_called()
        item.save.assert_not_called()

    def test_token_is_stable(self):
        item = Mock()
        item.is_miss.return_value = True
        item.save.return_value = True
        self.pool.get_item.return_value = item

        key = LockKey('foo')
        self.store.save(key)
        self.store.put_off_expiration(key, 10)
        tokens = [args[0] for args, _ in item.set.call_args_list]
        self.assertEqual(len(tokens), 2)
        self.assertEqual(tokens[0], tokens[1])
        self.assertEqual(key.get_state(CacheLockStore.state_namespace), tokens[0])

    def test_token_is_random(self):
        first, second = LockKey('foo'), LockKey('foo')
        self.assertNotEqual(self.store._get_token(first), self.store._get_token(second))
        self.assertFalse(self.pool.method_calls)

#---------------------------------------------------------------------------#
# main
#---------------------------------------------------------------------------#
if __name__ == "__main__":
    unittest.main()
