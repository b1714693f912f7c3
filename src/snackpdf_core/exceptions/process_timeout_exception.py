from typing import List


class ProcessTimeoutException(Exception):
    """Exception raised when an external process exceeds the configured timeout.

    The process is killed before this exception is raised.

    Attributes
    ----------
    argv : list of str
        The command line of the killed process
    timeout : float
        The timeout in seconds
    """

    def __init__(self, argv: List[str], timeout: float):
        self.argv = argv
        self.timeout = timeout
        self.message = f'{argv[0]} did not finish within {timeout:g} seconds'
        super().__init__(self.message)
