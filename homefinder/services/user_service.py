"""User and agent lookups. User records always come back without passwords."""

from typing import List

from homefinder.core.exceptions import NotFoundError
from homefinder.core.models import Agent, User, public_user
from homefinder.core.result import ServiceResult

from .base import BaseService, LOOKUP, service_call


class UserService(BaseService):

    @service_call(LOOKUP)
    def get_user(self, user_id: str) -> ServiceResult[User]:
        record = self.store.find('users', lambda u: u['id'] == user_id)
        if not record:
            raise NotFoundError('User not found.')
        return ServiceResult.ok(public_user(record))

    @service_call(LOOKUP)
    def list_all_users(self) -> ServiceResult[List[User]]:
        return ServiceResult.ok([public_user(u) for u in self.store.get_all('users')])

    @service_call(LOOKUP)
    def get_agent_by_id(self, agent_id: str) -> ServiceResult[Agent]:
        record = self.store.find('agents', lambda a: a['id'] == agent_id)
        if not record:
            raise NotFoundError('Agent not found.')
        return ServiceResult.ok(Agent.from_dict(record))

    @service_call(LOOKUP)
    def get_agent_by_user_id(self, user_id: str) -> ServiceResult[Agent]:
        record = self.store.find('agents', lambda a: a['agent_user_id'] == user_id)
        if not record:
            raise NotFoundError('Agent not found for this user.')
        return ServiceResult.ok(Agent.from_dict(record))

    @service_call(LOOKUP)
    def list_all_agents(self) -> ServiceResult[List[Agent]]:
        return ServiceResult.ok([Agent.from_dict(a) for a in self.store.get_all('agents')])
