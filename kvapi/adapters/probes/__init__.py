from .http_probe import HttpReachabilityProbe
from .store_probe import StoreHealthProbe

__all__ = ["HttpReachabilityProbe", "StoreHealthProbe"]
