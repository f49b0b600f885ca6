"""
StoryHub - 故事聚合与社交互动服务
"""

__version__ = "0.1.0"
