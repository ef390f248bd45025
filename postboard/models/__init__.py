# Models package init
from postboard.models.post import Post
from postboard.models.user import User

__all__ = ["Post", "User"]
