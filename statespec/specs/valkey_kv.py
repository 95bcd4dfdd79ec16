"""
Spec to test the string commands of a Valkey server

The model is the dict of keys the spec has written under KEY_PREFIX. Every
iteration starts by deleting those keys so the server and the model agree.
"""
import random
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

import valkey
from valkey.exceptions import ValkeyError

from ..models import Command, CommandOutput, Spec

logger = logging.getLogger(__name__)

KEY_PREFIX = "statespec:"
# Small keyspace so sets overwrite and gets/deletes hit existing keys
KEYSPACE = 8


@dataclass(frozen=True)
class KVState:
    data: Dict[str, str] = field(default_factory=dict)
    last_read: Optional[Tuple[str, Optional[str]]] = None
    last_deleted: int = 0
    last_count: int = 0


def new_client(host: str = "127.0.0.1", port: int = 6379, timeout: float = 5.0) -> valkey.Valkey:
    return valkey.Valkey(
        host=host,
        port=port,
        socket_timeout=timeout,
        socket_connect_timeout=timeout,
        decode_responses=True
    )


def spec_keys(client: valkey.Valkey) -> List[str]:
    return list(client.scan_iter(match=f"{KEY_PREFIX}*"))


def clear_spec_keys(client: valkey.Valkey) -> int:
    """Delete every key written by the spec, returns the number deleted"""
    keys = spec_keys(client)
    if not keys:
        return 0
    return client.delete(*keys)


def set_command(client: valkey.Valkey) -> Command[KVState]:
    def gen(state: KVState, rnd: random.Random):
        key = f"{KEY_PREFIX}{rnd.randrange(KEYSPACE)}"
        value = f"v{rnd.getrandbits(32):08x}"

        def run() -> CommandOutput[KVState]:
            try:
                client.set(key, value)
            except ValkeyError as e:
                return CommandOutput(new_state=state, description=(key, value), error=e)
            return CommandOutput(new_state=replace(state, data={**state.data, key: value}), description=(key, value))

        return run

    return Command(name="set", gen=gen)


def get_command(client: valkey.Valkey) -> Command[KVState]:
    def gen(state: KVState, rnd: random.Random):
        if not state.data:
            return None
        key = rnd.choice(sorted(state.data))

        def run() -> CommandOutput[KVState]:
            new_state = replace(state, last_read=None)
            try:
                value = client.get(key)
            except ValkeyError as e:
                return CommandOutput(new_state=new_state, description=key, error=e)
            return CommandOutput(new_state=replace(new_state, last_read=(key, value)), description=key)

        return run

    def verify(old_state: KVState, new_state: KVState) -> bool:
        if new_state.last_read is None:
            return False
        key, value = new_state.last_read
        return old_state.data.get(key) == value

    return Command(name="get", gen=gen, verify=verify)


def delete_command(client: valkey.Valkey) -> Command[KVState]:
    def gen(state: KVState, rnd: random.Random):
        if not state.data:
            return None
        key = rnd.choice(sorted(state.data))

        def run() -> CommandOutput[KVState]:
            data = {k: v for k, v in state.data.items() if k != key}
            new_state = replace(state, data=data, last_deleted=0)
            try:
                deleted = client.delete(key)
            except ValkeyError as e:
                return CommandOutput(new_state=new_state, description=key, error=e)
            return CommandOutput(new_state=replace(new_state, last_deleted=deleted), description=key)

        return run

    def verify(old_state: KVState, new_state: KVState) -> bool:
        return new_state.last_deleted == 1

    return Command(name="delete", gen=gen, verify=verify)


def count_command(client: valkey.Valkey) -> Command[KVState]:
    def gen(state: KVState, rnd: random.Random):
        def run() -> CommandOutput[KVState]:
            new_state = replace(state, last_count=-1)
            try:
                count = len(spec_keys(client))
            except ValkeyError as e:
                return CommandOutput(new_state=new_state, description=KEY_PREFIX, error=e)
            return CommandOutput(new_state=replace(new_state, last_count=count), description=KEY_PREFIX)

        return run

    def verify(old_state: KVState, new_state: KVState) -> bool:
        return new_state.last_count == len(old_state.data)

    return Command(name="count", gen=gen, verify=verify)


def new_valkey_spec(host: str = "127.0.0.1", port: int = 6379,
                    client: Optional[valkey.Valkey] = None) -> Spec[KVState]:
    """Build the spec. Spec keys are removed and the client closed on teardown."""
    client = client or new_client(host, port)

    def setup():
        try:
            client.ping()
        except ValkeyError:
            # teardown does not run after a failed setup
            client.close()
            raise
        logger.info(f"Connected to Valkey at {host}:{port}")

    def init_state() -> KVState:
        clear_spec_keys(client)
        return KVState()

    def teardown():
        try:
            deleted = clear_spec_keys(client)
            logger.debug(f"Removed {deleted} spec keys")
        finally:
            client.close()

    return Spec(
        name="valkey",
        init_state=init_state,
        setup=setup,
        teardown=teardown,
        commands=[
            set_command(client),
            get_command(client),
            delete_command(client),
            count_command(client),
        ],
    )
