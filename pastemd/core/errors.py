import enum
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class ErrorKind(enum.Enum):
    """Flat set of failure kinds returned by the paste engine."""

    PASSWORD_INCORRECT = (401, "The given password is invalid.")
    ALREADY_EXISTS = (400, "A paste with this URL already exists.")
    VALUE_ERROR = (400, "One of the given values is invalid.")
    NOT_FOUND = (404, "No paste with this URL has been found.")
    OTHER = (500, "An unspecified error occured with the paste manager")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]


class PasteError(Exception):
    kind: ErrorKind = ErrorKind.OTHER

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.kind.message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class PasswordIncorrect(PasteError):
    kind = ErrorKind.PASSWORD_INCORRECT


class AlreadyExists(PasteError):
    kind = ErrorKind.ALREADY_EXISTS


class InvalidValue(PasteError, ValueError):
    kind = ErrorKind.VALUE_ERROR


class NotFound(PasteError):
    kind = ErrorKind.NOT_FOUND


class Other(PasteError):
    kind = ErrorKind.OTHER


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Collapse backend failures into the engine's error kinds."""
    try:
        yield
    except PasteError:
        raise
    except IntegrityError as exc:
        logger.info("%s violated a uniqueness constraint", operation)
        raise AlreadyExists() from exc
    except SQLAlchemyError as exc:
        logger.error("%s failed in the database", operation, exc_info=True)
        raise Other() from exc
    except (OSError, TypeError, ValueError) as exc:
        # connection failures and (de)serialization problems
        logger.error("%s failed", operation, exc_info=True)
        raise Other() from exc
