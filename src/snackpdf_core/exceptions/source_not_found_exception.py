from pathlib import Path


class SourceNotFoundException(Exception):
    """Exception raised when the uploaded PDF referenced by a request no longer exists.

    The upload might have expired or been cleaned up already; the client is
    expected to upload the file again.

    Attributes
    ----------
    path : Path
        The path that was referenced
    message : str
        Explanation of the error
    """

    def __init__(self, path: Path | str, message: str = None):
        self.path = Path(path)
        self.message = message or 'PDF file not found. Please upload the file again.'
        super().__init__(self.message)

    def __str__(self) -> str:
        return f'{self.message} [{self.path}]'
