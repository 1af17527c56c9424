"""Translation of database driver errors into domain exceptions."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar, cast

import structlog
from django.db import DatabaseError, IntegrityError, InterfaceError, OperationalError

from shared.domain.exceptions import PersistenceFailure, StorageUnavailable

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_storage_errors(func: F) -> F:
    """Re-raise connectivity errors as ``StorageUnavailable`` and rejected
    writes as ``PersistenceFailure``.

    Apply it *outside* ``transaction.atomic`` so the transaction is rolled
    back before the domain exception propagates.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error("storage.unavailable", operation=func.__qualname__, error=str(exc))
            raise StorageUnavailable(str(exc)) from exc
        except (IntegrityError, DatabaseError) as exc:
            logger.error("storage.write_rejected", operation=func.__qualname__, error=str(exc))
            raise PersistenceFailure(str(exc)) from exc

    return cast(F, wrapper)
