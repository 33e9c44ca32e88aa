"""
Request class that parses the resource query string arguments:
- fields
- orderBy
- searchQuery, genre
- pageNumber, pageSize
"""

from flask import Request
import reshape
from .errors import ValidationError
from .pagination import ResourceParameters


# pylint: disable=too-many-ancestors
class ReshapeRequest(Request):
    """
    Flask request with the parsed resource parameters
    """

    json_content_types = ["application/json", "application/json-patch+json"]
    _resource_parameters = None

    @property
    def fields(self):
        """
        :return: the "fields" query string argument, None if it wasn't given
        """
        return self.args.get("fields") or None

    @property
    def resource_parameters(self) -> ResourceParameters:
        """
        :return: collection parameters (paging, sorting, shaping and filtering)
        """
        if self._resource_parameters is None:
            self._resource_parameters = ResourceParameters.from_args(self.args)
        return self._resource_parameters

    def get_json_payload(self):
        """
        :return: the json request payload
        """
        content_type = (self.content_type or "").split(";")[0]
        if content_type not in self.json_content_types:
            reshape.log.warning(f'Invalid Media Type! "{self.content_type}"')
        result = self.get_json(force=True, silent=True)
        if result is None:
            raise ValidationError("Invalid JSON Payload")
        return result
