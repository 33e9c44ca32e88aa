import datetime
import json
import uuid

from reshape import Link, PageMetadata
from reshape.json_encoder import ReshapeJSONEncoder


def test_encode_links_and_metadata():
    data = {
        "links": [Link("http://localhost/api/authors", "self")],
        "metadata": PageMetadata(total_count=1, page_size=10, current_page=1, total_pages=1),
    }
    assert json.loads(json.dumps(data, cls=ReshapeJSONEncoder)) == {
        "links": [{"href": "http://localhost/api/authors", "rel": "self", "method": "GET"}],
        "metadata": {"totalCount": 1, "pageSize": 10, "currentPage": 1, "totalPages": 1},
    }


def test_encode_common_types():
    key = uuid.uuid4()
    data = [datetime.date(1947, 9, 21), key, {"a"}, datetime.timedelta(minutes=1)]
    assert json.loads(json.dumps(data, cls=ReshapeJSONEncoder)) == ["1947-09-21", str(key), ["a"], "0:01:00"]


def test_provider_keeps_the_field_order(app):
    with app.app_context():
        body = app.json.dumps({"name": "Douglas Adams", "id": "abc", "age": 74})
    assert list(json.loads(body).keys()) == ["name", "id", "age"]
