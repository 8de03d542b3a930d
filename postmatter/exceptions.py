class PostmatterError(Exception):
    """Base error for postmatter."""

    pass


class PostReadError(PostmatterError):
    """Raised when a post file cannot be read or decoded"""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message
