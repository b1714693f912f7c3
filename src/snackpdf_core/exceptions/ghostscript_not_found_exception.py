from typing import List, Optional


class GhostscriptNotFoundException(Exception):
    """Exception raised when no usable Ghostscript executable is available.

    Attributes
    ----------
    candidates : list of str
        The executables that were tried
    """

    def __init__(self, candidates: Optional[List[str]] = None):
        self.candidates = candidates or []
        self.message = (
            'Ghostscript not found. Install it from '
            'https://ghostscript.com/releases/gsdnld.html and make sure it is on the PATH.'
        )
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.candidates:
            return f'{self.message} Tried: {", ".join(self.candidates)}'
        return self.message
