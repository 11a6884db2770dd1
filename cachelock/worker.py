import time
from threading import Thread, Event, Lock

from .exceptions import LockConflictedError
from .policy     import CacheLockPolicy, to_seconds

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheLockWorker(Thread):
    ''' The worker that runs to periodically put off the expiration
    of the watched locks as long as the system is alive. This prevents
    long running processes from losing their locks to their ttl.

    .. code-block:: python

        from cachelock import CacheLockWorker

        worker = CacheLockWorker(store=store, ttl=30, period=10)
        worker.watch(key)   # after store.save(key) succeeded
        worker.start()
        worker.stop(timeout=10) # seconds

    A lock that can no longer be renewed is dropped from the watch
    list; the worker never tries to acquire it again.
    '''

    def __init__(self, **kwargs):
        ''' Initializes a new instance of the CacheLockWorker class

        :param daemon: True to daemonize the thread, False otherwise (default True)
        :param store: The store to renew the locks with
        :param policy: The policy to operate the worker with
        :param ttl: The lease given at each renewal (default the store initial ttl)
        :param period: The length of each cycle in seconds (default the policy renew period)
        '''
        super(CacheLockWorker, self).__init__()

        self.daemon = kwargs.get('daemon', True)
        self.store  = kwargs.get('store')
        self.policy = kwargs.get('policy', CacheLockPolicy())
        self.ttl    = to_seconds(kwargs['ttl'] if 'ttl' in kwargs else self.store.initial_ttl)
        self.period = to_seconds(kwargs.get('period', self.policy.renew_period))
        self.keys   = {}
        self._mutex = Lock()
        self._is_stopped = Event()

    # ------------------------------------------------------------
    # watch methods
    # ------------------------------------------------------------

    def watch(self, key):
        ''' Start renewing the lock of the supplied key

        :param key: The key of a lock we currently own
        '''
        with self._mutex:
            self.keys[str(key)] = key

    def unwatch(self, key):
        ''' Stop renewing the lock of the supplied key

        :param key: The key to stop renewing
        '''
        with self._mutex:
            self.keys.pop(str(key), None)

    def renew_all(self):
        ''' Perform a single round of renewals over all of the
        currently watched locks.

        Keys lost to another token are dropped; any other failure is
        logged and the key stays watched.

        :returns: The list of keys lost to another token
        '''
        with self._mutex:
            keys = list(self.keys.values())

        lost = []
        for key in keys:
            try:
                self.store.put_off_expiration(key, self.ttl)
            except LockConflictedError:
                _logger.warning("lost lock, no longer renewing: %s", key)
                self.unwatch(key)
                lost.append(key)
            except Exception:
                _logger.exception("failed to renew lock: %s", key)
        return lost

    # ------------------------------------------------------------
    # thread methods
    # ------------------------------------------------------------

    def stop(self, timeout=None):
        ''' Stop the underlying worker thread and join on its
        completion for the specified timeout.

        :param timeout: The amount of time to wait for the shutdown
        '''
        self._is_stopped.set()
        if self.is_alive(): self.join(timeout)

    def run(self):
        ''' The worker thread used to put off the expiration
        of the currently watched locks.
        '''
        while not self._is_stopped.is_set():
            _logger.debug("starting next round of worker: %d locks", len(self.keys))
            start = time.time()
            self.renew_all()
            elapsed = time.time() - start
            self._is_stopped.wait(max(self.period - elapsed, 0))
