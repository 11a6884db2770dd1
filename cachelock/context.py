#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheLockContext(object):
    ''' A context manager to help using locks in a `with` statement.

    .. code-block:: python

        from cachelock import LockKey, locker

        with locker(store=store, key=LockKey("lock-to-get")) as handle:
            pass # perform locked activity here
        # upon leaving the lock will be released

    Entering does not wait: if the lock is held by someone else the
    `LockConflictedError` of the store is raised from the `with`.
    '''

    def __init__(self, **kwargs):
        ''' Initialize a new instance of the CacheLockContext

        :param store: The store to acquire the lock with
        :param key: The key of the lock to acquire
        '''
        self.store = kwargs.get('store')
        self.key   = kwargs.get('key')

    def __enter__(self):
        ''' On enter of the context manager, this will acquire
        the specified lock. When the lock has been acquired,
        this will return.
        '''
        self.store.save(self.key)
        return self

    def __exit__(self, ex_type, value, traceback):
        ''' On exit of the context manager, this will release
        the currently held lock. When this operation is
        finished, this will return.
        '''
        _logger.debug("leaving locked context: %s", self.key)
        self.store.delete(self.key)
