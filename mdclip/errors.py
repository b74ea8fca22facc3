# mdclip/errors.py


class MdclipError(Exception):
    """Base exception for mdclip errors."""
    pass


class ConfigError(MdclipError):
    """Raised when settings hold a value of the wrong type or range."""
    pass


class ClipboardError(MdclipError):
    """Raised when the clipboard cannot be written."""
    pass
