class WalkConfigError(ValueError):
    """
    Exception raised when a walk configuration is invalid.

    The configuration is validated when it is constructed, so this error is always
    raised before any filesystem access happens.

    Example:
        >>> error = WalkConfigError("depth must be a non-negative integer or None, got -1")
        >>> str(error)
        'depth must be a non-negative integer or None, got -1'
        >>> isinstance(error, ValueError)
        True
    """

    pass


class SymlinkTraversalError(NotADirectoryError):
    """
    Exception raised when the walk root is a symlink to a directory but traversal
    of symlinked directories is disabled.

    Attributes:
        path (str): Absolute path of the rejected root.

    Example:
        >>> error = SymlinkTraversalError("/tmp/link")
        >>> str(error)
        'Root path is a symlink directory but walking symlink directories is disabled: /tmp/link'
    """

    def __init__(self, path: str) -> None:
        """
        Initialize the exception with the rejected root path.

        Args:
            path (str): Absolute path of the rejected root.
        """
        self.path = path
        super().__init__(f"Root path is a symlink directory but walking symlink directories is disabled: {path}")


class UnknownEntityTypeError(OSError):
    """
    Exception raised when a filesystem entity cannot be classified as a directory,
    a file, a symlink directory or a symlink file.

    This error is never absorbed by the permission policy of a walk since it points at
    an unsupported object (device, FIFO, socket, or a symlink to one of those).

    Attributes:
        path (str): Path of the entity that could not be classified.

    Example:
        >>> error = UnknownEntityTypeError("/dev/null")
        >>> str(error)
        'Unable to classify path, entity type is unknown: /dev/null'
    """

    def __init__(self, path: str) -> None:
        """
        Initialize the exception with the path of the unclassifiable entity.

        Args:
            path (str): Path of the entity that could not be classified.
        """
        self.path = path
        super().__init__(f"Unable to classify path, entity type is unknown: {path}")


class DuplicateEntryError(RuntimeError):
    """
    Exception raised when a consumer sees the same relative path twice in one walk.

    A single walk never yields a relative path twice; seeing one again means the
    walker contract was broken and the accumulated result cannot be trusted.

    Attributes:
        path (str): The duplicated relative path.
        previous (str): The value recorded for the first occurrence.

    Example:
        >>> error = DuplicateEntryError("a/b.txt", "ff00")
        >>> str(error)
        'Path processed again: a/b.txt (previous result: ff00)'
    """

    def __init__(self, path: str, previous: str) -> None:
        """
        Initialize the exception with the duplicated path and its first result.

        Args:
            path (str): The duplicated relative path.
            previous (str): The value recorded for the first occurrence.
        """
        self.path = path
        self.previous = previous
        super().__init__(f"Path processed again: {path} (previous result: {previous})")
