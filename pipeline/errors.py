class ClassifierError(Exception):
    """Base class for failures that end in a conservative (negative) result."""


class FormatError(ClassifierError):
    """Declared JSON content could not be parsed."""


class ReadError(ClassifierError):
    """Uploaded file content could not be read at all."""
