"""Log output for the endpoint_authz package.

Modules log through logging.getLogger(__name__); setup_logging() attaches
one stdout handler to the package logger. Calling it again only updates
the level and format, so it is safe to call from every entry point.
"""

import logging
import sys

from endpoint_authz.core.config import Settings, get_settings

PACKAGE_LOGGER = "endpoint_authz"
HANDLER_NAME = "endpoint_authz.stdout"

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
# otelTraceID/otelSpanID exist only while LoggingInstrumentor is active.
_TRACE_FORMAT = (
    "%(asctime)s %(levelname)s [%(name)s] "
    "[trace_id=%(otelTraceID)s span_id=%(otelSpanID)s] %(message)s"
)


def setup_logging(
    settings: Settings | None = None, trace_ids: bool = False
) -> logging.Logger:
    """Configure the package logger: DEBUG when settings.debug, else INFO.

    Args:
        settings: Optional settings; defaults to get_settings().
        trace_ids: Include trace and span ids in each line. Only valid
            while logging instrumentation is on.

    Returns:
        The package logger.
    """
    settings = settings or get_settings()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    handler = next(
        (h for h in package_logger.handlers if h.get_name() == HANDLER_NAME), None
    )
    if handler is None:
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(HANDLER_NAME)
        package_logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(_TRACE_FORMAT if trace_ids else _FORMAT))
    return package_logger
