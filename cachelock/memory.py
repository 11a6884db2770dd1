from threading import Lock

from .lock import LockRecord
from .pool import CacheItem, CachePool

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class MemoryCachePool(CachePool):
    ''' A cache pool that keeps its records in the memory of the
    current process. It is safe to share between threads, which
    makes it useful for tests and single process deployments::

        from cachelock import CacheLockStore, LockKey, MemoryCachePool

        store = CacheLockStore(MemoryCachePool())
        store.save(LockKey("reports.nightly"))
    '''

    def __init__(self, **kwargs):
        ''' Initialize a new instance of the MemoryCachePool class

        :param policy: The policy supplying the clock and default ttl
        :param records: The initial records by name, default {}
        '''
        super(MemoryCachePool, self).__init__(**kwargs)
        self.records = kwargs.get('records', {})
        self._mutex  = Lock()

    def get_item(self, key):
        with self._mutex:
            record = self._retrieve_record(key)
        if not record:
            return CacheItem(self, key)
        return CacheItem(self, key, value=record.value, is_hit=True)

    def save_item(self, item):
        with self._mutex:
            record = self._retrieve_record(item.key)

            # ------------------------------------------------------------
            # Case 1:
            # ------------------------------------------------------------
            # The item was a miss when fetched, so someone else created a
            # live record at this key in the meantime.
            # ------------------------------------------------------------
            if item.is_miss() and record:
                _logger.debug("record created concurrently at: %s", item.key)
                return False

            # ------------------------------------------------------------
            # Case 2:
            # ------------------------------------------------------------
            # The item was a hit when fetched, but the record has since
            # expired, been deleted, or been replaced by another value.
            # ------------------------------------------------------------
            if item.is_hit and (not record or record.value != item.observed):
                _logger.debug("record changed concurrently at: %s", item.key)
                return False

            self.records[item.key] = LockRecord(
                name=item.key, value=item.value, expires=self.get_expiration(item))
            return True

    def delete_item(self, key):
        with self._mutex:
            self.records.pop(key, None)

    def _retrieve_record(self, key):
        ''' Retrieve the live record at the supplied key, dropping
        it if it has expired.

        :param key: The cache key to retrieve
        :returns: The record if it is live, None otherwise
        '''
        record = self.records.get(key, None)
        if record and self.is_expired(record.expires):
            _logger.debug("record expired at: %s", key)
            self.records.pop(key, None)
            record = None
        return record
