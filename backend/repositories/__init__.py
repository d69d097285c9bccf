"""Repositories: fixed queries over a session leased from the pool."""
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import exc as sa_exc

from errors import ConstraintViolation, QueryFailed


@contextmanager
def query_errors(operation: str) -> Iterator[None]:
    """Re-raise driver errors from the block as QueryFailed (ConstraintViolation for integrity errors)."""
    try:
        yield
    except sa_exc.IntegrityError as e:
        raise ConstraintViolation(f"Failed to {operation}: {e.orig}") from e
    except (sa_exc.SQLAlchemyError, OSError) as e:
        raise QueryFailed(f"Failed to {operation}: {e}") from e
