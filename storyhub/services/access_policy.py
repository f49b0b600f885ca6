"""
访问控制

- 授权：只有资源所有者可以修改资源
- 可见性：未发布的故事仅对作者本人可见
"""

from typing import Optional

from storyhub.db.models.story import Story
from storyhub.exceptions import UnauthorizedError


def can_mutate(actor_username: Optional[str], owner_username: Optional[str]) -> bool:
    """
    判断操作者是否可以修改资源

    两者都存在且完全相等（区分大小写）时返回 True
    """
    if not actor_username or not owner_username:
        return False
    return actor_username == owner_username


def ensure_can_mutate(
    actor_username: Optional[str],
    owner_username: Optional[str],
    message: str = "You are not allowed to modify this resource"
):
    """操作者不是所有者时抛出 UnauthorizedError"""
    if not can_mutate(actor_username, owner_username):
        raise UnauthorizedError(message)


def is_visible(story: Story, viewer_username: Optional[str] = None) -> bool:
    """已发布，或查看者是作者本人"""
    if story.is_published:
        return True
    return viewer_username is not None and viewer_username == story.author_username
