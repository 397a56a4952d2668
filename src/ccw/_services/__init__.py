from ._token_manager import TokenManager
from .quotes_service import QuotesService

__all__ = [
    "QuotesService",
    "TokenManager",
]
