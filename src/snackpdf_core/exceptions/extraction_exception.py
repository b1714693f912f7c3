from typing import Optional


class ExtractionException(Exception):
    """Exception raised when Ghostscript fails to produce an expected file.

    Covers both a non-zero exit status and a missing or empty output file.
    The whole request is aborted; partial results are never delivered.

    Attributes
    ----------
    message : str
        Explanation of the failure
    selection : str, optional
        The pages being extracted when the failure happened (e.g. `4-7`)
    details : dict, optional
        Additional details, such as the command line and its stderr
    """

    def __init__(
        self,
        message: str,
        selection: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.selection = selection
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        base_message = self.message
        if self.selection:
            base_message = f'{base_message} (pages {self.selection})'
        if self.details:
            return f'{base_message}\nDetails: {self.details}'
        return base_message
