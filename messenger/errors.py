class ChatError(Exception):
    """Base class for typed business-rule failures raised by the chat engine."""
    status_code = 500
    default_detail = 'Chat operation failed'

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidArgument(ChatError):
    status_code = 400
    default_detail = 'Invalid argument'


class Unauthenticated(ChatError):
    status_code = 401
    default_detail = 'Not authenticated'


class Forbidden(ChatError):
    status_code = 403
    default_detail = 'Not enough privileges'


class NotFound(ChatError):
    status_code = 404
    default_detail = 'Not found'


class DuplicateKey(ChatError):
    status_code = 409
    default_detail = 'Duplicate key'
