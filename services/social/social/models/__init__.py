from social.models.comment import Comment
from social.models.like import Like

__all__ = ["Comment", "Like"]
