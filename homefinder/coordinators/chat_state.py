"""
Chat state coordinator.

Keeps display-ready projections of the current user's conversations and
of the open conversation's messages.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional

from homefinder.core.models import DEFAULT_AVATAR_URL, Conversation, Message, User
from homefinder.services.chat_service import ChatService
from homefinder.services.user_service import UserService

from .auth_state import AuthState

logger = logging.getLogger(__name__)


@dataclass
class ConversationDisplay:
    id: str
    other_participant_name: str
    other_participant_avatar: str
    last_message_text: str
    last_message_at: str


@dataclass
class ChatMessageDisplay:
    id: str
    sender_name: str
    text: str
    timestamp: str
    is_current_user: bool


class ChatState:
    """Conversation list and active thread for the logged-in user."""

    def __init__(self, chat: ChatService, users: UserService, auth: AuthState):
        self.chat = chat
        self.users = users
        self.auth = auth
        self.conversations: List[ConversationDisplay] = []
        self.active_conversation: Optional[Conversation] = None
        self.active_messages: List[ChatMessageDisplay] = []
        self.loading_conversations = False
        self.loading_messages = False
        self.error: Optional[str] = None
        self._directory: Dict[str, User] = {}

    @property
    def user(self) -> Optional[User]:
        return self.auth.user

    @contextmanager
    def _loading(self, flag: str):
        setattr(self, flag, True)
        self.error = None
        try:
            yield
        except Exception:
            logger.exception("Unexpected chat error")
            self.error = 'An unexpected error occurred.'
            raise
        finally:
            setattr(self, flag, False)

    async def _lookup_user(self, user_id: Optional[str]) -> Optional[User]:
        """Public profile for name/avatar display, fetched on first use and cached."""
        if not user_id:
            return None
        if user_id not in self._directory:
            result = await self.users.get_user(user_id)
            if not result.success:
                return None
            self._directory[user_id] = result.data
        return self._directory[user_id]

    async def _message_display(self, message: Message) -> ChatMessageDisplay:
        sender = await self._lookup_user(message.sender_id)
        return ChatMessageDisplay(
            id=message.id,
            sender_name=sender.name if sender else 'Unknown',
            text=message.text,
            timestamp=message.timestamp,
            is_current_user=bool(self.user) and message.sender_id == self.user.id,
        )

    def clear(self) -> None:
        self.conversations = []
        self.active_conversation = None
        self.active_messages = []

    # ==========================================================================
    # Operations
    # ==========================================================================

    async def fetch_user_conversations(self) -> None:
        if not self.user:
            self.conversations = []
            return

        with self._loading('loading_conversations'):
            result = await self.chat.list_conversations(self.user.id)
            if not result.success:
                self.error = result.message or 'Failed to fetch conversations.'
                return

            displays = []
            for conv in result.data:
                other_id = next((p for p in conv.participants if p != self.user.id), None)
                other = await self._lookup_user(other_id)
                last = conv.last_message
                displays.append(ConversationDisplay(
                    id=conv.id,
                    other_participant_name=other.name if other else 'Unknown User',
                    other_participant_avatar=other.avatar_url if other else DEFAULT_AVATAR_URL,
                    last_message_text=last.text if last else '',
                    last_message_at=conv.last_message_at,
                ))
            self.conversations = displays

    async def set_active_conversation(self, conversation_id: Optional[str]) -> None:
        if not self.user or not conversation_id:
            self.active_conversation = None
            self.active_messages = []
            return

        with self._loading('loading_messages'):
            result = await self.chat.get_conversation(conversation_id, self.user.id)
            if not result.success:
                self.error = result.message or 'Failed to open conversation.'
                self.active_conversation = None
                self.active_messages = []
                return

            self.active_conversation = result.data
            self.active_messages = [await self._message_display(m) for m in result.data.messages]

    async def send_message(self, text: str) -> bool:
        if not self.user or not self.active_conversation or not text.strip():
            return False

        result = await self.chat.send_message(self.active_conversation.id, self.user.id, text)
        if not result.success:
            self.error = result.message or 'Failed to send message.'
            return False

        self.active_messages = [*self.active_messages, await self._message_display(result.data)]
        await self.fetch_user_conversations()
        return True

    async def start_new_conversation(self, other_user_id: str) -> Optional[Conversation]:
        if not self.user:
            self.error = 'You must be logged in to start a conversation.'
            return None
        if self.user.id == other_user_id:
            self.error = 'You cannot start a conversation with yourself.'
            return None

        result = await self.chat.create_or_get([self.user.id, other_user_id])
        if not result.success:
            self.error = result.message or 'Failed to start conversation.'
            return None

        await self.fetch_user_conversations()
        await self.set_active_conversation(result.data.id)
        return result.data
