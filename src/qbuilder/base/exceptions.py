class InvalidArgumentException(TypeError):
    """Exception raised when the value passed to build() is not a parameter record instance."""

    def __init__(
        self, message: str = "Parameter record must be a model instance and cannot be None."
    ):
        super().__init__(message)
