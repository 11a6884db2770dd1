import json

#--------------------------------------------------------------------------------
# classes
#--------------------------------------------------------------------------------

class CacheLockSchema(object):
    ''' A collection of the attribute names of the underlying
    DynamoDB cache table. This can be overridden by simply
    supplying new names in the constructor::

        from cachelock import CacheLockSchema

        schema = CacheLockSchema(name="key", table_name="AppLocks")
    '''

    def __init__(self, **kwargs):
        ''' Initializes a new instance of the CacheLockSchema class

        :param name: The database schema name for the cache key
        :param value: The database schema name for the stored value
        :param expires: The database schema name for the expiration timestamp
        :param table_name: The name of the database cache table
        :param read_capacity: The expected read capacity for the table
        :param write_capacity: The expected write capacity for the table
        '''
        self.name           = kwargs.get('name',       'N')
        self.value          = kwargs.get('value',      'V')
        self.expires        = kwargs.get('expires',    'E')
        self.table_name     = kwargs.get('table_name', 'Locks')
        self.read_capacity  = kwargs.get('read_capacity', 1)
        self.write_capacity = kwargs.get('write_capacity', 1)

    # ------------------------------------------------------------
    # schema operations
    # ------------------------------------------------------------
    # These methods convert to and from the underlying table
    # schema
    # ------------------------------------------------------------

    def to_schema(self, params):
        ''' Given a dict of record fields, convert them to the
        underlying schema and remove the fields that are not used.

        :param params: The record fields to convert
        :returns: The converted record attributes
        '''
        schema = {}
        if 'name'    in params: schema[self.name]    = params['name']
        if 'value'   in params: schema[self.value]   = params['value']
        if 'expires' in params: schema[self.expires] = params['expires']
        return schema

    def to_dict(self, schema):
        ''' Given a table record, convert it to a dict of
        the record field names.

        :param schema: The record to convert to a dict
        :returns: The converted dict with record field names
        '''
        expires = schema.get(self.expires, None)
        return {
            'name'    : schema.get(self.name,  None),
            'value'   : schema.get(self.value, None),
            'expires' : int(expires) if expires is not None else None,
        }

    def __str__(self):
        return json.dumps(self.__dict__)

    __repr__ = __str__
