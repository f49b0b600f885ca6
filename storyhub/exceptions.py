"""
业务异常定义

服务层通过抛出异常表达可由调用方处理的失败，API 层统一转换为响应
"""

from typing import Optional


class StoryHubError(Exception):
    """业务异常基类"""

    status_code = 500
    default_code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def to_error(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(StoryHubError):
    """输入校验失败（空标题、缺失字段、非法媒体类型等）"""

    status_code = 400
    default_code = "VALIDATION_ERROR"


class ConflictError(StoryHubError):
    """同一作者下故事标题重复"""

    status_code = 409
    default_code = "CONFLICT"


class NotFoundError(StoryHubError):
    """资源不存在，或因可见性规则对当前用户隐藏"""

    status_code = 404
    default_code = "NOT_FOUND"


class UnauthorizedError(StoryHubError):
    """操作者不是资源所有者"""

    status_code = 403
    default_code = "PERMISSION_DENIED"
