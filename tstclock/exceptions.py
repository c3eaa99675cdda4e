"""Application-specific exceptions for tstclock.

This module provides a hierarchy of exceptions that enable more precise
error handling for callers of the clock API. None of these are transient:
every one of them reports a mistake made by the caller.

Exception Hierarchy:
    TSTClockError (base)
    ├── InvalidTimestampError
    ├── SubscriptionError
    │   ├── InvalidSubscriberKeyError
    │   ├── DuplicateSubscriberError
    │   ├── SubscriberNotFoundError
    │   └── MissingCallbackError
    └── ConfigurationError
        └── ConstantMutationError
"""

from typing import Any


class TSTClockError(Exception):
    """Base exception for all tstclock errors.

    All application-specific exceptions inherit from this class,
    allowing callers to catch all tstclock errors with a single handler.
    """


class InvalidTimestampError(TSTClockError):
    """Raised when an explicit timestamp is not a 10-digit UNIX time in seconds.

    Attributes:
        value: The rejected value.
        message: Human-readable error description.
    """

    def __init__(self, value: Any, message: str | None = None) -> None:
        self.value = value
        self.message = message or (
            f"Invalid timestamp {value!r}: provide None or a 10 digit UNIX timestamp in seconds"
        )
        super().__init__(self.message)


class SubscriptionError(TSTClockError):
    """Base exception for subscription-related errors.

    Attributes:
        kind: The subscription kind (combined, time, date or moon).
        key: The subscriber key involved.
        message: Human-readable error description.
    """

    def __init__(self, kind: str, key: Any, message: str) -> None:
        self.kind = kind
        self.key = key
        self.message = message
        super().__init__(self.message)


class InvalidSubscriberKeyError(SubscriptionError):
    """Raised when a subscriber key is missing or blank."""

    def __init__(self, kind: str, key: Any, message: str | None = None) -> None:
        super().__init__(
            kind,
            key,
            message
            or f"Please provide an ID for the {kind} subscription. "
            "Store it to cancel the subscription later.",
        )


class DuplicateSubscriberError(SubscriptionError):
    """Raised when a key already subscribes to the same kind of update."""

    def __init__(self, kind: str, key: str, message: str | None = None) -> None:
        super().__init__(kind, key, message or f"{key} already subscribes to {kind} updates.")


class SubscriberNotFoundError(SubscriptionError):
    """Raised when cancelling a subscription that does not exist."""

    def __init__(self, kind: str, key: str, message: str | None = None) -> None:
        super().__init__(
            kind, key, message or f"{kind.capitalize()} subscription {key!r} could not be found."
        )


class MissingCallbackError(SubscriptionError):
    """Raised when a subscription is registered without a callable."""

    def __init__(self, kind: str, key: str, message: str | None = None) -> None:
        super().__init__(
            kind,
            key,
            message or f"Please provide a function to be called for {kind} updates of {key!r}.",
        )


class ConfigurationError(TSTClockError):
    """Raised when there is a configuration error.

    Attributes:
        parameter: The configuration parameter that is invalid.
        message: Human-readable error description.
    """

    def __init__(self, parameter: str, message: str | None = None) -> None:
        self.parameter = parameter
        self.message = message or f"Invalid configuration for '{parameter}'"
        super().__init__(self.message)


class ConstantMutationError(ConfigurationError):
    """Raised on any attempt to change a calendar constant.

    The constant table is shared by every clock instance, so this always
    indicates a programming error.

    Attributes:
        parameter: Name of the attribute that was assigned or deleted.
        value: The value that was about to be written, if any.
    """

    def __init__(self, parameter: str, value: Any = None) -> None:
        self.value = value
        super().__init__(
            parameter, f"Attempting to change constant {parameter} to {value!r}"
        )
