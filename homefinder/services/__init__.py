"""
Homefinder Services Module

Domain services over the collection store. Each public method is a
coroutine returning a ServiceResult.
"""

from .auth_service import AuthService, SessionStore
from .chat_service import ChatService
from .email_service import EmailService
from .listing_service import ListingService
from .saved_search_service import SavedSearchService
from .user_service import UserService

__all__ = [
    'AuthService',
    'SessionStore',
    'ChatService',
    'EmailService',
    'ListingService',
    'SavedSearchService',
    'UserService',
]
