"""
Real World (Conduit) API example spec
"""
from .client import RealWorldClient, RealWorldAPIError, DEFAULT_ENDPOINT
from .models import RealWorldState, User, NewUser, LoginUser, NewUserRequest, LoginUserRequest
from .commands import create_user_command, get_current_user_command, login_command, realworld_commands
from .spec import new_realworld_spec

__all__ = [
    'new_realworld_spec',
    'realworld_commands',
    'create_user_command',
    'get_current_user_command',
    'login_command',
    'RealWorldClient',
    'RealWorldAPIError',
    'RealWorldState',
    'User',
    'NewUser',
    'LoginUser',
    'NewUserRequest',
    'LoginUserRequest',
    'DEFAULT_ENDPOINT',
]
