from typing import Dict, List

from src.domain.entities import ActivityType, User


def recorded_actions(uow) -> List[ActivityType]:
    """ActivityType values passed to a mocked activity_logs.create, in call order"""
    return [call.args[0].action for call in uow.activity_logs.create.await_args_list]


def auth_headers(identity_provider, user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {identity_provider.token_for(user)}"}
