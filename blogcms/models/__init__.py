# Import all models to register them with SQLModel
from blogcms.models.user import User, UserPublic
from blogcms.models.post import Post, PostPublic
from blogcms.models.category import Category
from blogcms.models.media import Media
from blogcms.models.homepage import Homepage, HomepageContent

__all__ = [
    "User",
    "UserPublic",
    "Post",
    "PostPublic",
    "Category",
    "Media",
    "Homepage",
    "HomepageContent",
]
