"""Exception hierarchy with structured diagnostics.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class LocalizationError(Exception):
    """Base exception for all PathLexEngine errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


class PresetNotFoundError(LocalizationError):
    """A preset template names a tag with no registered renderer.

    Indicates a wiring bug rather than a missing translation, so it is raised
    from render() instead of being masked by a fallback.

    Attributes:
        tag: The unregistered preset tag
    """

    def __init__(self, message: str | Diagnostic, *, tag: str) -> None:
        super().__init__(message)
        self.tag = tag
