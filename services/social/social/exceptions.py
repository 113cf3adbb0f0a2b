# Domain exceptions raised by the social service layer.
# Each carries a stable kind; the controller layer maps kinds to HTTP status.

from enum import Enum


class ErrorKind(str, Enum):
    MEDIA_NOT_FOUND = "media_not_found"
    COMMENT_NOT_FOUND = "comment_not_found"
    LIKE_NOT_FOUND = "like_not_found"
    UNAUTHORIZED = "unauthorized"
    DUPLICATE_LIKE = "duplicate_like"
    CONTENT_REJECTED = "content_rejected"


class SocialError(Exception):
    """Base for recoverable, caller-caused failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class MediaNotFoundError(SocialError):
    kind = ErrorKind.MEDIA_NOT_FOUND

    def __init__(self, media_id: int) -> None:
        self.media_id = media_id
        super().__init__(f"Media with ID {media_id} does not exist")


class CommentNotFoundError(SocialError):
    kind = ErrorKind.COMMENT_NOT_FOUND

    def __init__(self, comment_id: int, *, parent: bool = False) -> None:
        self.comment_id = comment_id
        self.parent = parent
        label = "Parent comment" if parent else "Comment"
        super().__init__(f"{label} with ID {comment_id} was not found")


class LikeNotFoundError(SocialError):
    kind = ErrorKind.LIKE_NOT_FOUND

    def __init__(self, user_id: int, media_id: int) -> None:
        self.user_id = user_id
        self.media_id = media_id
        super().__init__(f"Like not found for user {user_id} on media {media_id}")


class UnauthorizedCommentAccessError(SocialError):
    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, action: str) -> None:
        super().__init__(f"User is not authorized to {action} this comment")


class DuplicateLikeError(SocialError):
    kind = ErrorKind.DUPLICATE_LIKE

    def __init__(self, media_id: int) -> None:
        self.media_id = media_id
        super().__init__(f"User has already liked media {media_id}")


class ContentRejectedError(SocialError):
    """Raised when the moderation service does not allow the comment text."""

    kind = ErrorKind.CONTENT_REJECTED

    def __init__(self) -> None:
        super().__init__("Comment content was rejected by moderation")
