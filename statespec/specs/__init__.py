"""
Example specs
"""
from .realworld import new_realworld_spec
from .valkey_kv import new_valkey_spec

__all__ = [
    'new_realworld_spec',
    'new_valkey_spec',
]
