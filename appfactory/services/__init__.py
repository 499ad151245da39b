"""Services built by the runtime itself."""

from appfactory.services.cache import Cache, CacheFactory
from appfactory.services.namespace_examiner import NamespaceExaminer
from appfactory.services.settings import SettingNotFoundError, Settings

__all__ = ["Cache", "CacheFactory", "NamespaceExaminer", "SettingNotFoundError", "Settings"]
