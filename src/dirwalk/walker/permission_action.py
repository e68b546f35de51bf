"""Policy for handling permission errors while descending into sub-directories."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from dirwalk.exceptions import WalkConfigError

if TYPE_CHECKING:
    from dirwalk.walker.entry import WalkEntry

PermissionHandler = Callable[["WalkEntry"], None]


class PermissionAction(str, Enum):
    """Action to take when a sub-directory cannot be read during a walk.

    Values:
        RAISE: Propagate the PermissionError and terminate the walk (default behavior)
        CALLBACK: Call the configured handler with the denied entry and continue
    """

    RAISE = "raise"
    CALLBACK = "callback"


@dataclass(frozen=True)
class PermissionPolicy:
    """A permission action together with the handler it needs.

    Build instances with ``PermissionPolicy.raise_error()`` or
    ``PermissionPolicy.callback(handler)``.

    Attributes:
        action (PermissionAction): What to do on a permission error.
        handler (Optional[PermissionHandler]): Called with the entry of the denied
            sub-directory. Required for ``CALLBACK``, forbidden for ``RAISE``.

    Example:
        >>> denied = []
        >>> policy = PermissionPolicy.callback(denied.append)
        >>> policy.action
        <PermissionAction.CALLBACK: 'callback'>
        >>> PermissionPolicy.raise_error().handler is None
        True
    """

    action: PermissionAction = PermissionAction.RAISE
    handler: Optional[PermissionHandler] = None

    def __post_init__(self) -> None:
        if self.action == PermissionAction.CALLBACK and self.handler is None:
            raise WalkConfigError("A handler is required for the callback permission action")
        if self.action == PermissionAction.RAISE and self.handler is not None:
            raise WalkConfigError("A handler cannot be used with the raise permission action")

    @classmethod
    def raise_error(cls) -> "PermissionPolicy":
        return cls(PermissionAction.RAISE)

    @classmethod
    def callback(cls, handler: PermissionHandler) -> "PermissionPolicy":
        return cls(PermissionAction.CALLBACK, handler)

    def absorbs(self, error: BaseException) -> bool:
        """Return whether the error is absorbed by this policy instead of propagated."""
        return self.action == PermissionAction.CALLBACK and isinstance(error, PermissionError)
