"""Exception taxonomy for the launcher core.

Load failures are contained inside the registry and recorded; lookup
failures and action failures propagate to whoever called ``execute``.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class CentralFlowError(Exception):
    """Base class for every error raised by central_flow."""


class ProviderLoadError(CentralFlowError):
    """A provider could not be resolved, imported or instantiated."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(f"Provider {name!r}: {message}")
        self.name = name
        self.message = message


class ProviderContractError(ProviderLoadError):
    """A loaded object does not satisfy the provider capability contract."""

    def __init__(self, name: str, problems: list[str]) -> None:
        super().__init__(name, "; ".join(problems))
        self.problems = problems


class ResultNotFoundError(CentralFlowError, LookupError):
    """The result id is not part of the currently held result set."""

    def __init__(self, result_id: str) -> None:
        super().__init__(f"Result with id {result_id!r} not found")
        self.result_id = result_id


def log_and_describe_failure(
    *, operation: str, exc: BaseException, user_message: str
) -> str:
    """Log full exception details while returning a short user-facing line."""
    logger.exception("Operation '%s' failed", operation, exc_info=exc)
    return user_message
