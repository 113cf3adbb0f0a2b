"""HTTP translation of service-layer failures, shared by all controllers."""

import logging

from fastapi import HTTPException, status

from social.exceptions import ErrorKind, SocialError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.MEDIA_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.COMMENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.LIKE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.DUPLICATE_LIKE: status.HTTP_409_CONFLICT,
    ErrorKind.CONTENT_REJECTED: status.HTTP_400_BAD_REQUEST,
}


def domain_error(exc: SocialError, operation: str) -> HTTPException:
    logger.warning("Failed to %s: %s", operation, exc.message)
    return HTTPException(status_code=STATUS_BY_KIND[exc.kind], detail=exc.message)


def unexpected_error(operation: str) -> HTTPException:
    """Log the active exception in full and hide it behind a generic 400."""
    logger.exception("An unexpected error occurred while trying to %s", operation)
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="The request could not be processed.",
    )
