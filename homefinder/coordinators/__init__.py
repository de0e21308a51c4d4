"""
Client state coordinators: per-domain in-memory state built on the services.
"""

from .auth_state import AuthState
from .chat_state import ChatMessageDisplay, ChatState, ConversationDisplay
from .listing_state import LISTINGS_PER_PAGE, ListingState

__all__ = [
    'AuthState',
    'ChatState',
    'ChatMessageDisplay',
    'ConversationDisplay',
    'ListingState',
    'LISTINGS_PER_PAGE',
]
