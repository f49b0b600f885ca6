"""
ID 生成器

提供各种实体的唯一 ID 生成功能
"""

import ulid


def generate_ulid() -> str:
    """
    生成 ULID（Universally Unique Lexicographically Sortable Identifier）

    特点：
    - 128-bit 兼容性
    - 按时间排序
    - 规范化的字符串表示（26个字符）

    Returns:
        ULID 字符串
    """
    return str(ulid.new())


def generate_story_id() -> str:
    """
    生成故事 ID

    格式：story_<ulid>
    示例：story_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        故事 ID
    """
    return f"story_{generate_ulid()}"


def generate_character_id() -> str:
    """
    生成角色 ID

    格式：char_<ulid>
    示例：char_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        角色 ID
    """
    return f"char_{generate_ulid()}"


def generate_comment_id() -> str:
    """
    生成评论 ID

    格式：comment_<ulid>
    示例：comment_01ARZ3NDEKTSV4RRFFQ69G5FAV

    Returns:
        评论 ID
    """
    return f"comment_{generate_ulid()}"
