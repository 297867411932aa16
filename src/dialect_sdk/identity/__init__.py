from .interface import Identity, IdentityResolver
from .resolvers import (
    AGGREGATE_SEQUENTIAL,
    FIRST_FOUND,
    FIRST_FOUND_FAST,
    IDENTITY_STRATEGIES,
    AggregateSequentialIdentityResolver,
    FirstFoundFastIdentityResolver,
    FirstFoundIdentityResolver,
    create_identity_resolver,
)

__all__ = [
    "Identity",
    "IdentityResolver",
    "FirstFoundIdentityResolver",
    "FirstFoundFastIdentityResolver",
    "AggregateSequentialIdentityResolver",
    "create_identity_resolver",
    "FIRST_FOUND",
    "FIRST_FOUND_FAST",
    "AGGREGATE_SEQUENTIAL",
    "IDENTITY_STRATEGIES",
]
