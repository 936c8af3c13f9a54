class DecodeError(Exception):
    """The buffer could not be decoded as the requested module format."""


class TruncatedInputError(DecodeError):
    """A read ran past the end of the buffer."""

    def __init__(self, position: int, requested: int, available: int):
        self.position = position
        self.requested = requested
        self.available = available
        super().__init__(f"wanted {requested} bytes at offset {position}, "
                         f"only {available} left")
