"""Test helpers module for shared test utilities.

- constants: Token and participant identifiers
- factories: Pool factories and funding helpers
"""

from tests.helpers.constants import ALICE, BOB, CAROL, FUNDING, POOL_ACCOUNT, X, Y, Z
from tests.helpers.factories import fund, make_pool, make_seeded_pool

__all__ = [
    # Constants
    "X",
    "Y",
    "Z",
    "ALICE",
    "BOB",
    "CAROL",
    "FUNDING",
    "POOL_ACCOUNT",
    # Factories
    "fund",
    "make_pool",
    "make_seeded_pool",
]
