"""
Tasklists Backend
Shared task lists with to-dos over a GraphQL API
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
