"""
This module contains the exceptions raised by the nspatch framework.
"""


class NspatchException(Exception):
    """
    Exceptions raised by the nspatch framework.
    """

    def __init__(self, message: str):
        """
        Initializes the exception with the given message.
        """
        super().__init__(message)
        self.message = message
