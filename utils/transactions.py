from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Union

from sqlalchemy.exc import IntegrityError

from crud.base import CRUDRepository
from utils.errors import ConflictError

logger = logging.getLogger(__name__)


@contextmanager
def commit_or_conflict(
    repo: CRUDRepository, conflict_message: Union[str, Callable[[], str]]
) -> Iterator[None]:
    """
    Run the writes in the block, then commit. A unique/foreign-key rejection
    from the database (a concurrent writer won the check-then-write race)
    is rolled back and surfaces as the same ConflictError the pre-check raises.

    ``conflict_message`` may be a callable; it is invoked after the rollback
    so it can query the session to tell which constraint failed.
    """
    try:
        yield
        repo.commit()
    except IntegrityError as e:
        repo.rollback()
        logger.warning("Violação de integridade: %s", e.orig)
        message = conflict_message() if callable(conflict_message) else conflict_message
        raise ConflictError(message) from e
