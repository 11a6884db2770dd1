from .key        import LockKey
from .lock       import LockRecord
from .pool       import CacheItem, CachePool
from .store      import CacheLockStore
from .memory     import MemoryCachePool
from .policy     import CacheLockPolicy
from .schema     import CacheLockSchema
from .worker     import CacheLockWorker
from .dynamodb   import DynamoDBCachePool
from .context    import CacheLockContext as locker
from .exceptions import LockError, InvalidArgumentError, LockConflictedError, NotSupportedError
