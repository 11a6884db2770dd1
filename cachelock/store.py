from math import ceil

from .exceptions import InvalidArgumentError, LockConflictedError, NotSupportedError
from .policy     import CacheLockPolicy, to_seconds

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheLockStore(object):
    ''' A non blocking lock store that keeps its locks in a cache
    pool. A lock is a record at the key name holding the random
    token of its owner; the record expires with its ttl unless the
    owner puts off its expiration::

        from cachelock import CacheLockStore, LockKey, MemoryCachePool

        store = CacheLockStore(MemoryCachePool(), initial_ttl=30)
        key   = LockKey("orders.sync")

        store.save(key)                   # raises LockConflictedError if held
        store.put_off_expiration(key, 30) # renew the lease
        store.delete(key)                 # release if still ours

    The store itself holds no lock state, so a single instance can
    be shared by any number of keys.
    '''

    state_namespace = 'cachelock.store.CacheLockStore'

    def __init__(self, pool, initial_ttl=None, policy=None):
        ''' Initialize a new instance of the CacheLockStore class

        :param pool: The cache pool to store the locks in
        :param initial_ttl: The lease in seconds of a new lock, default 300
        :param policy: The policy to create the tokens with
        '''
        self.policy = policy or CacheLockPolicy()
        initial_ttl = to_seconds(initial_ttl) if initial_ttl is not None else self.policy.initial_ttl

        if initial_ttl < 1:
            raise InvalidArgumentError(
                "%s() expects a strictly positive TTL. Got %s." % (type(self).__name__, initial_ttl))

        self.pool        = pool
        self.initial_ttl = initial_ttl

    # ------------------------------------------------------------
    # locking methods
    # ------------------------------------------------------------

    def save(self, key):
        ''' Attempt to acquire the lock for the supplied key
        without waiting.

        If the lock already exists it may be our own, so we try
        to put off its expiration instead, which fails if the
        lock belongs to another token.

        :param key: The key of the lock to acquire
        :raises LockConflictedError: If the lock could not be acquired
        '''
        item = self.pool.get_item(str(key))

        if item.is_miss():
            item.set(self._get_token(key))
            if item.save():
                _logger.debug("acquired lock: %s", key)
                return
            _logger.debug("lost the race to create lock: %s", key)

        self.put_off_expiration(key, self.initial_ttl)

    def wait_and_save(self, key):
        ''' Blocking acquisition is not available as the cache
        has no way to notify us when a lock is released.

        :param key: The key of the lock to acquire
        :raises NotSupportedError: Always
        '''
        raise NotSupportedError(
            'The store "%s" does not support blocking locks.' % type(self).__name__)

    def put_off_expiration(self, key, ttl):
        ''' Extend the lease of a lock we own to the supplied ttl,
        which is rounded up to the next whole second.

        :param key: The key of the lock to renew
        :param ttl: The new lease in seconds (a number or a timedelta)
        :raises InvalidArgumentError: If the ttl is less than one second
        :raises LockConflictedError: If the lock is owned by another token
        '''
        ttl = to_seconds(ttl)
        if ttl < 1:
            raise InvalidArgumentError(
                "put_off_expiration() expects a TTL greater or equals to 1. Got %s." % ttl)

        token = self._get_token(key)
        item  = self.pool.get_item(str(key))

        if not item.is_miss() and item.get() != token:
            _logger.debug("lock owned by another token: %s", key)
            raise LockConflictedError("The lock %s is owned by another token." % key)

        item.set(token)
        item.set_ttl(int(ceil(ttl)))

        # ------------------------------------------------------------
        # The read above is only a hint; someone may have taken the
        # lock since, so the result of the save is what decides.
        # ------------------------------------------------------------
        if not item.save():
            _logger.debug("failed to put off expiration of lock: %s", key)
            raise LockConflictedError("The lock %s could not be saved." % key)
        _logger.debug("put off expiration of lock %s by %d secs", key, ceil(ttl))

    def delete(self, key):
        ''' Release the lock for the supplied key if we still own
        it, otherwise do nothing.

        :param key: The key of the lock to release
        '''
        item = self.pool.get_item(str(key))

        if item.is_miss():
            _logger.debug("lock already released: %s", key)
            return

        if item.get() != self._get_token(key):
            _logger.debug("not releasing lock owned by another token: %s", key)
            return

        self.pool.delete_item(str(key))
        _logger.debug("released lock: %s", key)

    def exists(self, key):
        ''' Check if the lock for the supplied key is currently
        owned by us (not merely held by someone).

        :param key: The key of the lock to check
        :returns: True if we own the lock, False otherwise
        '''
        item = self.pool.get_item(str(key))
        return not item.is_miss() and item.get() == self._get_token(key)

    # ------------------------------------------------------------
    # token methods
    # ------------------------------------------------------------

    def _get_token(self, key):
        ''' Retrieve the unique token of this store for the supplied
        key, generating it on first use.

        :param key: The key to retrieve the token for
        :returns: The token of the key
        '''
        if not key.has_state(self.state_namespace):
            key.set_state(self.state_namespace, self.policy.get_new_token())
        return key.get_state(self.state_namespace)
