# reshape to json encoding

import datetime
import decimal
import json
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import reshape
from .config import is_debug
from .links import Link
from .pagination import PageMetadata


class _ReshapeJSONEncoder:
    """
    JSON encoding for links, pagination metadata and common types
    """

    # pylint: disable=too-many-return-statements,arguments-differ,method-hidden
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if obj is None:
            return None
        if isinstance(obj, Link):
            return obj.to_dict()
        if isinstance(obj, PageMetadata):
            return obj.to_dict()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):  # pragma: no cover
            return float(obj)
        if isinstance(obj, bytes):  # pragma: no cover
            if obj == b"":
                return ""
            reshape.log.debug("ReshapeJSONEncoder: serializing bytes obj")
            return obj.hex()

        if not is_debug():  # pragma: no cover
            reshape.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
            return {"error": "ReshapeJSONEncoder invalid object"}

        return str(obj)  # pragma: no cover


class ReshapeJSONProvider(_ReshapeJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding, the shaped field order is kept
    """

    sort_keys = False


class ReshapeJSONEncoder(_ReshapeJSONEncoder, json.JSONEncoder):
    """
    Common JSON encoding
    """

    pass
