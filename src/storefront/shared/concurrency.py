"""Command dispatch with one Unit of Work in flight per process.

Protean's memory provider gives every Unit of Work a private copy of the whole
store and swaps it in on commit, so two Units of Work that overlap in time
silently drop each other's writes. Every write command therefore goes through
``dispatch``, which holds a process-wide lock from the first read to the
commit.

Across processes the database arbitrates: aggregates are saved against their
loaded ``_version`` and the production provider runs at REPEATABLE READ, so
the losing commit fails with ``ExpectedVersionError`` or ``TransactionError``.
"""

import threading

from protean.exceptions import ExpectedVersionError, TransactionError
from protean.utils.globals import current_domain

# Raised when another writer changed the same aggregates first
CONFLICT_ERRORS = (ExpectedVersionError, TransactionError)

_unit_of_work_lock = threading.RLock()


def dispatch(command):
    """Process ``command`` synchronously and return the handler's result."""
    with _unit_of_work_lock:
        return current_domain.process(command, asynchronous=False)
