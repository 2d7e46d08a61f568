"""Exceptions raised by the strict parsers."""


class SyntaxParseError(ValueError):
    """A syntax summary could not be parsed."""


class EmptyInputError(SyntaxParseError):
    def __init__(self, message: str = "Syntax string must have length greater than 0."):
        super().__init__(message)


class MalformedParameterError(SyntaxParseError):
    """A token does not match any parameter production of the syntax grammar."""

    def __init__(self, token: str):
        super().__init__(f"{token} is malformed.")
        self.token = token


class InvalidDocumentError(ValueError):
    """A Markdown document lacks structure required by its reader."""
