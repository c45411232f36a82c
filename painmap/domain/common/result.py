# painmap/domain/common/result.py

"""
Success-or-error return values.

Every service method that can fail for reasons outside the caller's control
returns a Result. Clicks that simply hit nothing are not failures; the
resolver returns None for those.
"""
from typing import TypeVar, Generic, Optional, Union, Callable, Type

from painmap.domain.common.errors import DomainError

T = TypeVar('T')
U = TypeVar('U')


class Result(Generic[T]):
    """Holds either a value or a DomainError, never both."""

    def __init__(self, value: Optional[T], error: Optional[Union[str, DomainError]]):
        self._value = value
        # A bare message becomes an uncategorized error
        self._error = DomainError(message=error) if isinstance(error, str) else error

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        return cls(value, None)

    @classmethod
    def fail(cls, error: Union[str, DomainError]) -> 'Result[T]':
        return cls(None, error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        """
        The success value.

        Raises:
            ValueError: On a failed result; check is_success first
        """
        if self._error is not None:
            raise ValueError(f"Failed result has no value: {self._error}")
        return self._value

    @property
    def error(self) -> DomainError:
        """
        The failure.

        Raises:
            ValueError: On a successful result
        """
        if self._error is None:
            raise ValueError("Successful result has no error")
        return self._error

    def value_or(self, default: T) -> T:
        return self._value if self._error is None else default

    def and_then(self, func: Callable[[T], 'Result[U]']) -> 'Result[U]':
        """
        Feed the value into the next step, or pass the failure along.

        Args:
            func: Next step, taking the value and returning a Result
        """
        if self._error is not None:
            return Result.fail(self._error)
        return func(self._value)

    @classmethod
    def from_operation(cls, operation_func: Callable[[], object], logger,
                       error_type: Type[DomainError], error_message: str, **kwargs) -> 'Result':
        """
        Run a step that may raise and turn the outcome into a Result.

        A raised exception becomes ``error_type`` with the message
        ``"<error_message>: <exception>"`` and ``kwargs`` as its details, and
        is logged. A step that returns a Result itself is passed through.

        Args:
            operation_func: Step to run, taking no arguments
            logger: ILoggerService receiving the error
            error_type: DomainError subclass accepting message, details, inner_error
            error_message: Prefix of the error message
            **kwargs: Values stored in the error details
        """
        try:
            outcome = operation_func()
        except Exception as e:
            error = error_type(message=f"{error_message}: {e}", details=kwargs, inner_error=e)
            logger.error(str(error))
            return cls.fail(error)
        return outcome if isinstance(outcome, Result) else cls.ok(outcome)

