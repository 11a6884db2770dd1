import os
import time
import json
import base64
from datetime import timedelta

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# helpers
#--------------------------------------------------------------------------------

def to_seconds(duration):
    ''' Convert a duration (a timedelta or a number of seconds)
    to a number of seconds.

    :param duration: The duration to convert
    :returns: The duration in seconds
    '''
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return duration

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheLockPolicy(object):
    '''
    Along with the timing policy, this class also includes the policy
    for getting a new ownership token and a new timestamp. Both of
    these can be overridden to customize the use case for the system::

        import uuid
        from cachelock import CacheLockPolicy

        class MyPolicy(CacheLockPolicy):

            def get_new_token(self):
                return str(uuid.uuid4())
    '''

    def __init__(self, **kwargs):
        ''' Initialize a new instance of the CacheLockPolicy class

        :param initial_ttl: The lease given to a lock when it is acquired
        :param default_ttl: The lease given by the cache to items saved without one
        :param renew_period: The time to wait between two renewal rounds
        :param token_size: The number of random bytes of an ownership token
        '''
        initial_ttl  = kwargs.get('initial_ttl', timedelta(minutes=5))
        default_ttl  = kwargs.get('default_ttl', timedelta(days=5))
        renew_period = kwargs.get('renew_period', timedelta(seconds=60))

        self.initial_ttl  = to_seconds(initial_ttl)
        self.default_ttl  = int(to_seconds(default_ttl))
        self.renew_period = to_seconds(renew_period)
        self.token_size   = kwargs.get('token_size', 32)

    def get_new_token(self):
        ''' Helper method to generate a new ownership token from
        cryptographically random bytes.

        :returns: A new printable token
        '''
        token = base64.b64encode(os.urandom(self.token_size)).decode('ascii')
        _logger.debug("generated a new token of %d bytes", self.token_size)
        return token

    def get_new_timestamp(self):
        ''' Helper method to retrieve the current time since
        the epoch in milliseconds.

        :returns: The current time in milliseconds
        '''
        return int(time.time() * 1000)

    # ------------------------------------------------------------
    # magic methods
    # ------------------------------------------------------------

    def __str__(self):
        return json.dumps(self.__dict__)

    __repr__ = __str__
