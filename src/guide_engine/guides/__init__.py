from .database import SQLAlchemyGuideSource
from .files import FileGuideSource

__all__ = ["FileGuideSource", "SQLAlchemyGuideSource"]
