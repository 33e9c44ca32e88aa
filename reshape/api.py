# flask_restful Api subclass and the Resource superclass of the exposed endpoints
from http import HTTPStatus
import logging
import werkzeug
from flask import jsonify, make_response as flask_make_response
from flask_restful import Api, Resource as FRResource, abort
from functools import wraps
import reshape
from .errors import ReshapeError, GenericError
from .json_encoder import ReshapeJSONEncoder
from .reshape_init import Reshape
from typing import Callable


def make_response(data=None, status=HTTPStatus.OK, headers=None):
    """
    :param data: response body, no body is sent when None
    :param status: HTTP status
    :param headers: additional response headers
    :return: flask response
    """
    if data is None:
        response = flask_make_response("", status)
    else:
        response = flask_make_response(jsonify(data), status)
    for name, value in (headers or {}).items():
        response.headers[name] = value
    return response


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the exposed HTTP methods (get, post, put, delete)
    - commit the database
    - convert all exceptions to a JSON serializable error

    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args, **kwargs):
        """Wrap the method and perform error handling
        :param *args:
        :param **kwargs:
        :return: result of the wrapped method
        """
        reshape_exception = None
        status_code = 500
        message = ""
        try:
            result = fun(*args, **kwargs)
            reshape.DB.session.commit()
            return result

        except ReshapeError as exc:
            # this also catches NotFoundError
            reshape.log.exception(exc)
            reshape_exception = exc

        except werkzeug.exceptions.HTTPException as exc:
            status_code = exc.code
            message = exc.description
            reshape.log.error(message)

        except Exception as exc:
            reshape.log.exception(exc)
            reshape_exception = GenericError(str(exc))
            if reshape.log.getEffectiveLevel() > logging.DEBUG:
                reshape_exception.message = "Logging Disabled"

        status_code = getattr(reshape_exception, "status_code", status_code)
        api_code = getattr(reshape_exception, "api_code", status_code)
        title = getattr(reshape_exception, "message", message)
        detail = getattr(reshape_exception, "detail", title)

        reshape.DB.session.rollback()
        errors = dict(title=title, detail=detail, code=str(api_code))
        abort(status_code, errors=[errors])

    return method_wrapper


class Resource(FRResource):
    """
    Superclass for the exposed endpoints, all HTTP methods are wrapped by http_method_decorator
    """

    method_decorators = [http_method_decorator]


class ReshapeApi(Api):
    """
    flask_restful Api that initializes reshape for the app:
    - request class with the parsed resource parameters
    - JSON encoding that keeps the order of the shaped fields
    """

    def __init__(self, app=None, prefix: str = "", app_db=None, **kwargs) -> None:
        self.reshape = None
        self._reshape_kwargs = dict(app_db=app_db, **kwargs)
        super().__init__(app, prefix=prefix)

    def init_app(self, app) -> None:
        self.reshape = Reshape(app, **self._reshape_kwargs)
        app.config.setdefault("RESTFUL_JSON", {"cls": ReshapeJSONEncoder})
        super().init_app(app)
