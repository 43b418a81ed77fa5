from linkshortener.dao.memory.link_memory_dao import LinkMemoryDAO
from linkshortener.dao.memory.mixins import InMemoryStoreMixin


__all__ = [
    'LinkMemoryDAO',
    'InMemoryStoreMixin',
]
