"""
Chat Service

Two-party conversations between buyers and agents.
"""

import logging
from typing import Dict, List, Sequence

from homefinder.core.database import generate_id
from homefinder.core.exceptions import NotFoundError, UnauthorizedError, ValidationError
from homefinder.core.models import Conversation, Message
from homefinder.core.result import ServiceResult

from .base import BaseService, FAST, LOOKUP, STANDARD, now_iso, parse_iso, service_call

logger = logging.getLogger(__name__)


def same_participants(conversation: Dict, participant_ids: Sequence[str]) -> bool:
    """Same size and same set of ids, order-insensitive."""
    participants = conversation.get('participants') or []
    return (len(participants) == len(participant_ids)
            and set(participants) == set(participant_ids))


class ChatService(BaseService):
    """Conversations and messages."""

    @service_call(STANDARD)
    def list_conversations(self, user_id: str) -> ServiceResult[List[Conversation]]:
        mine = [c for c in self.store.get_all('conversations') if user_id in c.get('participants', [])]
        mine.sort(key=lambda c: parse_iso(c['last_message_at']), reverse=True)
        return ServiceResult.ok([Conversation.from_dict(c) for c in mine])

    @service_call(LOOKUP)
    def get_conversation(self, conversation_id: str, user_id: str) -> ServiceResult[Conversation]:
        """Fetch one conversation. Non-participants get the same answer as a missing id."""
        record = self.store.find(
            'conversations',
            lambda c: c['id'] == conversation_id and user_id in c.get('participants', []),
        )
        if not record:
            raise NotFoundError('Conversation not found or not authorized.')

        conversation = Conversation.from_dict(record)
        conversation.messages.sort(key=lambda m: parse_iso(m.timestamp))
        return ServiceResult.ok(conversation)

    @service_call(STANDARD)
    def create_or_get(self, participant_ids: Sequence[str]) -> ServiceResult[Conversation]:
        participant_ids = list(participant_ids)
        if len(participant_ids) != 2 or len(set(participant_ids)) != 2:
            raise ValidationError('A conversation needs exactly two distinct participants.')

        existing = self.store.find('conversations', lambda c: same_participants(c, participant_ids))
        if existing:
            return ServiceResult.ok(Conversation.from_dict(existing))

        conversation = Conversation(
            id=generate_id(),
            participants=participant_ids,
            last_message_at=now_iso(),
        )
        self.store.update('conversations', lambda convs: [*convs, conversation.to_dict()])

        logger.info(f"Conversation {conversation.id} started between {', '.join(participant_ids)}")
        return ServiceResult.ok(conversation)

    @service_call(FAST)
    def send_message(self, conversation_id: str, sender_id: str, text: str) -> ServiceResult[Message]:
        record = self.store.find('conversations', lambda c: c['id'] == conversation_id)
        if not record:
            raise NotFoundError('Conversation not found.')
        if sender_id not in record.get('participants', []):
            raise UnauthorizedError('Sender is not a participant in this conversation.')
        if not text or not text.strip():
            raise ValidationError('Message text is required.')

        message = Message(
            id=generate_id(),
            conversation_id=conversation_id,
            sender_id=sender_id,
            text=text,
            timestamp=now_iso(),
        )
        updated = {
            **record,
            'messages': [*record.get('messages', []), message.to_dict()],
            'last_message_at': message.timestamp,
        }
        self.store.update(
            'conversations',
            lambda convs: [updated if c['id'] == conversation_id else c for c in convs],
        )
        return ServiceResult.ok(message)
