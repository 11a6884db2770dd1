'''
The exceptions raised by the lock store. Every exception derives from
`LockError` so callers can catch the whole family at once, while the
`LockConflictedError` is the only one that reflects a race that is
worth retrying.
'''

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class LockError(Exception):
    ''' The base class of all the lock store errors '''


class InvalidArgumentError(LockError, ValueError):
    ''' Raised before any cache access when an argument (a ttl, a
    key name) cannot be used.
    '''


class LockConflictedError(LockError):
    ''' Raised when the ownership of a lock could not be established,
    either because another token holds it or because the cache
    rejected our write.
    '''


class NotSupportedError(LockError):
    ''' Raised when an operation is not supported by the store '''
