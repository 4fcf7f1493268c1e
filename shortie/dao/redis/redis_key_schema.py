__all__ = ['RedisKeySchema']


class RedisKeySchema:
    """Build the Redis key names of URL records.

    Keys are colon-separated. A prefix (usually `<app name>:<app env>`, see
    `app_prefix()`) namespaces them, so several deployments can share a database:

        >>> RedisKeySchema(prefix='shortie:dev').link_key('4e24c46962')
        'shortie:dev:links:4e24c46962'
        >>> RedisKeySchema().link_key('4e24c46962')
        'links:4e24c46962'
    """

    LINKS = 'links'

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    def _key(self, *parts: str) -> str:
        if self.prefix is not None:
            parts = (self.prefix, *parts)
        return ':'.join(parts)

    def link_key(self, shortcode: str) -> str:
        """Key of the JSON document holding one URL record"""
        return self._key(self.LINKS, shortcode)
