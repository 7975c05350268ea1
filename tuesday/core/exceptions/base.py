class AppException(Exception):
    """Base exception for all Tuesday errors."""

    def __init__(self, message: str = "Something went wrong"):
        self.message = message
        super().__init__(self.message)
