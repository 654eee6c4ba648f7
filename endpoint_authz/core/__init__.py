"""Core: config, request context carrier, and composition root.

Single place for settings and request-scoped state.
"""

from endpoint_authz.core.config import Settings, get_settings
from endpoint_authz.core.context import RequestContext, get_authorizer

__all__ = ["Settings", "get_settings", "RequestContext", "get_authorizer"]
