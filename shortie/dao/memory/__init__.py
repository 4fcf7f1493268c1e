from shortie.dao.memory.url_memory_dao import URLMemoryDAO


__all__ = ['URLMemoryDAO']
