"""Service construction runtime behind the application factory."""

from appfactory.application_factory import ApplicationFactory
from appfactory.service_names import ServiceName

__all__ = ["ApplicationFactory", "ServiceName"]
