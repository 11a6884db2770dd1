'''
The LockRecord represents what a cache pool stores at a single key: the
name of the lock, the token of its owner, and the timestamp (epoch
milliseconds) after which the record is treated as absent. It is an
immutable tuple so that records handed out by a pool cannot change the
state of the pool.
'''
from collections import namedtuple

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

LockRecord = namedtuple('LockRecord', ['name', 'value', 'expires'])
