import boto3
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from .lock   import LockRecord
from .pool   import CacheItem, CachePool
from .schema import CacheLockSchema

#--------------------------------------------------------------------------------
# logging
#--------------------------------------------------------------------------------

import logging
_logger = logging.getLogger(__name__)

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class DynamoDBCachePool(CachePool):
    ''' A cache pool that stores its records in a DynamoDB table.
    Every save is a conditional put so that a writer that lost a
    race against another writer is told so by DynamoDB itself::

        from cachelock import CacheLockStore, CacheLockSchema, DynamoDBCachePool

        pool  = DynamoDBCachePool(schema=CacheLockSchema(table_name="AppLocks"))
        store = CacheLockStore(pool)
    '''

    def __init__(self, **kwargs):
        ''' Initialize a new instance of the DynamoDBCachePool class

        :param policy: The policy supplying the clock and default ttl
        :param schema: The schema of the database table to work with
        :param resource: The boto3 dynamodb resource to create the table with
        :param table: The current handle to the dynamodb table
        '''
        super(DynamoDBCachePool, self).__init__(**kwargs)
        self.schema   = kwargs.get('schema', CacheLockSchema())
        self.resource = kwargs.get('resource', None)
        self.table    = kwargs.get('table', None) or self._create_table()

    def get_item(self, key):
        record = self._retrieve_entry(key)
        if not record or (record.expires is not None and self.is_expired(record.expires)):
            return CacheItem(self, key)
        return CacheItem(self, key, value=record.value, is_hit=True)

    def save_item(self, item):
        ''' Put the supplied item as long as the record at its key is
        still what the item observed:

        * after a miss, there must be no live record at the key
        * after a hit, the stored value must be the observed one

        :param item: The item to write
        :returns: True if the item was written, False otherwise
        '''
        params = {
            'name':    item.key,
            'value':   item.value,
            'expires': self.get_expiration(item),
        }

        if item.is_miss():
            condition = (Attr(self.schema.name).not_exists()
                | Attr(self.schema.expires).lte(self.policy.get_new_timestamp()))
        else: condition = Attr(self.schema.value).eq(item.observed)

        try:
            self.table.put_item(Item=self.schema.to_schema(params), ConditionExpression=condition)
            return True
        except ClientError as ex:
            if ex.response['Error']['Code'] != 'ConditionalCheckFailedException':
                raise
            _logger.debug("conditional save rejected for: %s", item.key)
        return False

    def delete_item(self, key):
        self.table.delete_item(Key={ self.schema.name: key })

    # ------------------------------------------------------------
    # raw dynamo methods
    # ------------------------------------------------------------

    def _create_table(self):
        ''' Create the underlying dynamodb table for writing
        records to if it does not exist, otherwise uses the existing
        table. We use the `load` method call to verify if the
        table exists or not.

        :returns: A handle to the underlying dynamodb table
        '''
        resource = self.resource or boto3.resource('dynamodb')
        table    = resource.Table(self.schema.table_name)

        try:
            table.load()
            _logger.debug("current table status: %s", table.table_status)
        except ClientError as ex:
            if ex.response['Error']['Code'] != 'ResourceNotFoundException':
                raise
            _logger.exception("table %s does not exist, creating it", self.schema.table_name)
            table = resource.create_table(
                TableName = self.schema.table_name,
                KeySchema = [{ 'AttributeName': self.schema.name, 'KeyType': 'HASH' }],
                AttributeDefinitions = [{ 'AttributeName': self.schema.name, 'AttributeType': 'S' }],
                ProvisionedThroughput = {
                    'ReadCapacityUnits':  self.schema.read_capacity,
                    'WriteCapacityUnits': self.schema.write_capacity,
                })
            table.wait_until_exists()
            _logger.debug("current table status: %s", table.table_status)
        return table

    def _retrieve_entry(self, key):
        ''' Given a cache key, attempt to retrieve the record
        stored at that key with a consistent read.

        :param key: The cache key of the record to retrieve
        :returns: The record if it exists, None otherwise
        '''
        query  = {
            'Key': { self.schema.name: key },
            'ConsistentRead': True,
        }

        response = self.table.get_item(**query)
        if 'Item' not in response:
            _logger.debug("no cache entry for: %s", key)
            return None
        return LockRecord(**self.schema.to_dict(response['Item']))
