from shortie.dao.redis.redis_key_schema import RedisKeySchema
from shortie.dao.redis.url_redis_dao import URLRedisDAO
from shortie.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'URLRedisDAO',
    'RedisClientMixin',
]
