"""
Errors raised by the RWIS water quality client.
"""


class RwisError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(RwisError, ValueError):
    """The client was built without a usable service key."""


class MissingOptionError(RwisError, KeyError):
    """A required request option was not given.

    Attributes
    ----------
    option : str
        Name of the missing option
    """

    def __init__(self, option):
        self.option = option
        super().__init__(f"Required option '{option}' isn't given.")

    def __str__(self):
        # KeyError would repr() the message
        return self.args[0]


class UnexpectedResponseError(RwisError):
    """The API answered with something other than the expected envelope."""


class ResultCodeError(UnexpectedResponseError):
    """The envelope header carries a non-success result code.

    Attributes
    ----------
    code : str
        The ``resultCode`` from the response header
    message : str or None
        The ``resultMsg`` from the response header, if any
    """

    def __init__(self, code, message=None):
        self.code = code
        self.message = message
        text = f"Unexpected result code '{code}'"
        if message:
            text += f": {message}"
        super().__init__(text)
