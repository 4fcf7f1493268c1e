from shortie.dao.base.url_base_dao import URLBaseDAO


__all__ = ['URLBaseDAO']
