# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#      "title": "Validation Error: ",
#      "detail": "Validation Error: Unknown sort key 'bogus'",
#      "code": "400"
# }
#
import traceback
from flask import has_request_context, request
from werkzeug.exceptions import NotFound
import reshape
from sqlalchemy.exc import DontWrapMixin
from http import HTTPStatus
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class ReshapeError(Exception, DontWrapMixin):
    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""


class NotFoundError(ReshapeError, NotFound):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    message = "NotFoundError "

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value, api_code=None):
        """
        :param message: Message to be returned in the (json) body
        :param status_code: HTTP Status code
        :param api_code: API code
        """
        ReshapeError.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code or status_code
        reshape.log.error("Not found: %s", message)
        if is_debug():
            self.message += message
        else:
            self.message += HIDDEN_LOG


class GenericError(ReshapeError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    message = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code or status_code
        reshape.log.error("Generic Error: %s", message)
        if is_debug():
            if has_request_context():
                reshape.log.info(f"Error in {request.url}")
            reshape.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class ValidationError(ReshapeError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    message = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code or status_code
        reshape.log.warning("ValidationError: %s", message)
        self.message += message


class UnknownSortKey(ValidationError):
    """
    The client requested an orderBy key that has no property mapping
    """

    def __init__(self, key, status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        self.key = key
        super().__init__(f"Unknown sort key '{key}'", status_code, api_code)


class UnknownField(ValidationError):
    """
    The client requested a field that the resource doesn't declare
    """

    def __init__(self, field, status_code=HTTPStatus.BAD_REQUEST.value, api_code=None):
        self.field = field
        super().__init__(f"Unknown field '{field}'", status_code, api_code)


class UnprocessableEntityError(ValidationError):
    """
    The payload was well-formed but failed validation, errors holds the messages per member
    """

    def __init__(self, errors, status_code=HTTPStatus.UNPROCESSABLE_ENTITY.value, api_code=None):
        self.errors = errors
        details = "; ".join(f"{name}: {msg}" for name, messages in errors.items() for msg in messages)
        super().__init__(details, status_code, api_code)


class ConflictError(ReshapeError):
    """
    The request conflicts with an existing resource
    """

    status_code = HTTPStatus.CONFLICT.value
    message = "Conflict: "

    def __init__(self, message="", status_code=HTTPStatus.CONFLICT.value, api_code=None):
        Exception.__init__(self, message)
        self.status_code = status_code
        self.api_code = api_code or status_code
        reshape.log.warning("Conflict: %s", message)
        self.message += message


class MappingError(ReshapeError):
    """
    Property mapping misconfiguration, this is a programming error
    that should surface when the mappings are registered at startup
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = "Mapping Error: "

    def __init__(self, message=""):
        Exception.__init__(self, message)
        reshape.log.error("MappingError: %s", message)
        self.message += message


class MappingNotFound(MappingError):
    pass


class AmbiguousMapping(MappingError):
    pass


class DuplicateMappingKey(MappingError):
    pass
