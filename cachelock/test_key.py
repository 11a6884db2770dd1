#!/usr/bin/env python
import unittest
from cachelock.key import LockKey
from cachelock.exceptions import InvalidArgumentError

class LockKeyTest(unittest.TestCase):

    def test_key_name(self):
        key = LockKey('my.lock.name')
        self.assertEqual(str(key), 'my.lock.name')
        self.assertEqual(repr(key), "LockKey('my.lock.name')")

    def test_key_invalid_name(self):
        self.assertRaises(InvalidArgumentError, LockKey, '')
        self.assertRaises(ValueError, LockKey, None)

    def test_key_state(self):
        key = LockKey('foo')
        self.assertFalse(key.has_state('store'))
        self.assertRaises(KeyError, key.get_state, 'store')

        key.set_state('store', 'some-token')
        self.assertTrue(key.has_state('store'))
        self.assertEqual(key.get_state('store'), 'some-token')

    def test_key_state_is_namespaced(self):
        key = LockKey('foo')
        key.set_state('first.store', 'first-token')
        key.set_state('second.store', 'second-token')
        self.assertEqual(key.get_state('first.store'), 'first-token')
        self.assertEqual(key.get_state('second.store'), 'second-token')

    def test_key_state_is_per_instance(self):
        first, second = LockKey('foo'), LockKey('foo')
        first.set_state('store', 'some-token')
        self.assertFalse(second.has_state('store'))

#---------------------------------------------------------------------------#
# main
#---------------------------------------------------------------------------#
if __name__ == "__main__":
    unittest.main()
