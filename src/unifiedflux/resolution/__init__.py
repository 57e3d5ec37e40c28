"""
Handler resolution boundary for unifiedflux.
"""

from unifiedflux.resolution.factory import (
    ServiceFactory,
    ServiceFactoryMany,
    ServiceFactoryResolver,
)
from unifiedflux.resolution.protocols import HandlerResolverProtocol

__all__ = [
    "HandlerResolverProtocol",
    "ServiceFactory",
    "ServiceFactoryMany",
    "ServiceFactoryResolver",
]
