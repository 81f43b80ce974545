import logging

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """
    Stand-in for toast messages: anything with ``success(msg)`` and
    ``error(msg)`` can be passed where a notifier is expected.
    """

    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.warning(message)
