'''
The LockKey names the resource being locked. Along with the name it
carries a small amount of state that only lives as long as the key
instance itself; stores use it to remember the token they generated
for this key so that a second call with the same key proves the same
ownership.
'''
from .exceptions import InvalidArgumentError

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class LockKey(object):
    ''' The handle of a lockable resource::

        from cachelock import LockKey

        key = LockKey("invoices.export")
        store.save(key)

    Each process (or worker) must create its own instance, as the
    ownership token is stored on the instance and never shared.
    '''

    def __init__(self, name):
        ''' Initialize a new instance of the LockKey class

        :param name: The name of the resource, used as the cache key
        '''
        if not name:
            raise InvalidArgumentError("a lock key requires a non empty name")

        self.name   = str(name)
        self._state = {}

    # ------------------------------------------------------------
    # state methods
    # ------------------------------------------------------------

    def has_state(self, namespace):
        ''' Check if a value was stored under the supplied namespace

        :param namespace: The namespace of the owner of the value
        :returns: True if a value is stored, False otherwise
        '''
        return namespace in self._state

    def get_state(self, namespace):
        ''' Retrieve the value stored under the supplied namespace

        :param namespace: The namespace of the owner of the value
        :returns: The stored value
        :raises KeyError: If nothing is stored under the namespace
        '''
        return self._state[namespace]

    def set_state(self, namespace, value):
        ''' Store a value under the supplied namespace

        :param namespace: The namespace of the owner of the value
        :param value: The value to store
        '''
        self._state[namespace] = value

    # ------------------------------------------------------------
    # magic methods
    # ------------------------------------------------------------

    def __str__(self):
        return self.name

    def __repr__(self):
        return "LockKey(%r)" % self.name
