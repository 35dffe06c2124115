"""
errors.py - Error taxonomy of the question pipeline.

    BadInput          - question text missing or blank       → HTTP 400
    NotFound          - referenced chapter does not exist    → HTTP 404
    StoreUnavailable  - any document store read failure     → HTTP 500

Empty result sets are NOT errors: they are returned with a "todos" tag.
"""


class QAError(Exception):
    """Base class for pipeline errors."""
    status_code = 500
    public_message = "Error interno del servidor"


class BadInput(QAError):
    status_code = 400
    public_message = 'Falta parámetro "q"'


class NotFound(QAError):
    status_code = 404
    public_message = "Capítulo no existe"


class StoreUnavailable(QAError):
    """Raised by stores when the underlying data cannot be read."""
    status_code = 500
