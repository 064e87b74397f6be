"""SDK log gating.

Library modules log through stdlib loggers. The enable_logging option decides
whether those records are emitted at all, independent of how the host
application configured logging.
"""

import logging


class SDKLogger(logging.LoggerAdapter):
    """Logger adapter that drops every record when SDK logging is off."""

    def __init__(self, logger: logging.Logger, enabled: bool):
        super().__init__(logger, {})
        self.enabled = enabled

    def isEnabledFor(self, level: int) -> bool:
        return self.enabled and self.logger.isEnabledFor(level)


def sdk_logger(name: str, enabled: bool) -> SDKLogger:
    """Get a gated logger.

    Args:
        name: Logger name (typically __name__)
        enabled: Value of the enable_logging config option

    Returns:
        Logger adapter that only emits when enabled is True
    """
    return SDKLogger(logging.getLogger(name), enabled)
