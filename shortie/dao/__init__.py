from shortie.dao.factory import create_url_dao, url_dao


__all__ = [
    'create_url_dao',
    'url_dao',
]
