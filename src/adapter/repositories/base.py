from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy.exc import SQLAlchemyError

from src.app.errors import StorageError


@contextmanager
def storage_operation(operation: str, **details: Any) -> Iterator[None]:
    """
    Wrap database faults with the operation name and identifiers.

    Never pass tokens or password hashes as details.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        raise StorageError(
            operation, {key: str(value) for key, value in details.items()}
        ) from exc
