from typing import Optional


class InvalidRequestException(Exception):
    """Exception raised when an extraction request is malformed.

    Raised before any external process is started, e.g. when no page range
    is given, a page number is not positive or both ranges and pages are set.

    Attributes
    ----------
    message : str
        Explanation of the validation error
    details : dict, optional
        Additional details about the error, such as the offending value

    Example
    ---------
    try:
        raise InvalidRequestException(
            message="At least one page range is required",
            details={"ranges": []}
        )
    except InvalidRequestException as e:
        print(e)  # Will print: "Invalid request: At least one page range is required"
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        """Initialize the invalid request error.

        Parameters
        ----------
        message : str
            Human-readable error message
        details : dict, optional
            Additional error details, by default None
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        base_message = f'Invalid request: {self.message}'
        if self.details:
            return f'{base_message}\nDetails: {self.details}'
        return base_message
