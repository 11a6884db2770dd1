'''
The cache pool is the storage the lock store works against. A pool only
has to offer two atomic primitives: reading a single item and writing a
single item. There is no check-and-set across a read and a write, so an
item remembers what it observed when it was fetched and the pool saves
it only if that observation still holds; a save that lost a race
reports False instead of overwriting the winner.
'''
from .policy import CacheLockPolicy

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheItem(object):
    ''' A handle to the record stored at a single cache key as it
    was seen when the item was fetched from its pool.
    '''

    def __init__(self, pool, key, value=None, is_hit=False):
        ''' Initialize a new instance of the CacheItem class

        :param pool: The pool this item was fetched from
        :param key: The cache key of the item
        :param value: The value stored when the item was fetched
        :param is_hit: True if a live record existed when fetched
        '''
        self.pool     = pool
        self.key      = key
        self.observed = value if is_hit else None
        self.is_hit   = is_hit
        self.value    = self.observed
        self.ttl      = None

    def is_miss(self):
        ''' Check if there was no live record when the item was fetched

        :returns: True if the item is a miss, False otherwise
        '''
        return not self.is_hit

    def get(self):
        ''' Retrieve the value of the item, None on a miss

        :returns: The current value of the item
        '''
        return self.value

    def set(self, value):
        ''' Set the value to write on the next save

        :param value: The new value of the item
        '''
        self.value = value

    def set_ttl(self, ttl):
        ''' Set the time to live to write on the next save

        :param ttl: The time to live in seconds
        '''
        self.ttl = int(ttl)

    def save(self):
        ''' Write the item to its pool as long as the record was not
        changed by someone else since the item was fetched.

        :returns: True if the item was written, False otherwise
        '''
        is_saved = self.pool.save_item(self)
        if is_saved:
            self.observed = self.value
            self.is_hit   = True
        else: _logger.debug("pool rejected the save of item: %s", self.key)
        return is_saved


class CachePool(object):
    ''' The interface of the storage behind a lock store. Concrete
    pools implement `get_item`, `save_item`, and `delete_item`.
    '''

    def __init__(self, **kwargs):
        ''' Initialize a new instance of the CachePool class

        :param policy: The policy supplying the clock and default ttl
        '''
        self.policy = kwargs.get('policy', None) or CacheLockPolicy()

    def get_item(self, key):
        ''' Fetch the item stored at the supplied key, a miss
        item if there is no live record at that key.

        :param key: The cache key to fetch
        :returns: The CacheItem at that key
        '''
        raise NotImplementedError("get_item")

    def save_item(self, item):
        ''' Conditionally write the supplied item.

        :param item: The item to write
        :returns: True if the item was written, False otherwise
        '''
        raise NotImplementedError("save_item")

    def delete_item(self, key):
        ''' Delete the record at the supplied key, if any.

        :param key: The cache key to delete
        '''
        raise NotImplementedError("delete_item")

    # ------------------------------------------------------------
    # helper methods
    # ------------------------------------------------------------

    def get_expiration(self, item):
        ''' Compute the timestamp (in milliseconds) at which the
        supplied item should expire when written now.

        :param item: The item about to be written
        :returns: The expiration timestamp in milliseconds
        '''
        ttl = item.ttl if item.ttl is not None else self.policy.default_ttl
        return self.policy.get_new_timestamp() + ttl * 1000

    def is_expired(self, expires):
        ''' Check if a record with the supplied expiration
        timestamp is expired.

        :param expires: The expiration timestamp in milliseconds
        :returns: True if the record is expired, False otherwise
        '''
        return self.policy.get_new_timestamp() >= expires
