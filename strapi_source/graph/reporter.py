"""structlog-backed reporter."""

from typing import NoReturn

import structlog

from strapi_source.core.exceptions import FatalSourceError

logger = structlog.get_logger(__name__)


class StructlogReporter:
    """Logs progress; turns fatal reports into FatalSourceError."""

    def info(self, message: str) -> None:
        logger.info(message)

    def panic(self, message: str, error: BaseException) -> NoReturn:
        logger.error(
            message,
            error=str(error),
            error_type=type(error).__name__,
        )
        raise FatalSourceError(message, {"error": str(error)}) from error
