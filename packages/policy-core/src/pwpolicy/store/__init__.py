"""Policy storage - store contract, in-memory and SQL stores, file loader."""

from pwpolicy.store.base import PolicyStore, WritablePolicyStore
from pwpolicy.store.loader import PolicyLoadError, load_into, load_policies, parse_policies
from pwpolicy.store.memory import InMemoryPolicyStore
from pwpolicy.store.sql import SqlPolicyStore

__all__ = [
    "InMemoryPolicyStore",
    "PolicyLoadError",
    "PolicyStore",
    "SqlPolicyStore",
    "WritablePolicyStore",
    "load_into",
    "load_policies",
    "parse_policies",
]
