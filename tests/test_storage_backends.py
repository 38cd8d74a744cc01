"""
Tests for storage gateways.

Tests both JsonFileGateway and HttpGateway implementations.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from orbit.config import Settings
from orbit.constants import DEFAULT_TITLE
from orbit.model import Category, GraphModel
from orbit.storage import (
    GraphGateway,
    HttpGateway,
    JsonFileGateway,
    PersistenceError,
    create_gateway,
    get_backend_type,
)


class TestJsonFileGateway:
    """Tests for the local JSON document gateway."""

    @pytest.fixture
    def graph_file(self, tmp_path):
        path = tmp_path / "data" / "expertise.json"
        path.parent.mkdir()
        data = {
            "title": "Skills",
            "subtitle": "Sub",
            "categories": [
                {"id": "cat-1", "label": "Design", "iconType": "pen", "angle": 315,
                 "radius": 240, "color": "#F2A7A7",
                 "tools": [{"id": "t-1", "name": "Figma", "iconUrl": "f.svg", "color": "bg-white"}]},
            ],
        }
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def test_conforms_to_protocol(self, tmp_path):
        gateway = JsonFileGateway(tmp_path / "g.json")
        assert isinstance(gateway, GraphGateway)
        assert gateway.backend_type == "file"

    def test_load(self, graph_file):
        model = JsonFileGateway(graph_file).load()
        assert model.title == "Skills"
        cat = model.get_category("cat-1")
        assert (cat.angle, cat.radius, cat.icon_type) == (315, 240, "pen")
        assert cat.tools[0].icon_url == "f.svg"

    def test_missing_file_gives_default_document(self, tmp_path):
        model = JsonFileGateway(tmp_path / "missing.json").load()
        assert model.title == DEFAULT_TITLE
        assert model.categories == []

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(PersistenceError):
            JsonFileGateway(path).load()

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "expertise.json"
        model = GraphModel(title="Mine", categories=[Category(id="cat-x", angle=45, radius=120)])
        result = JsonFileGateway(path).save(model)
        assert result["success"] is True

        stored = json.loads(path.read_text(encoding="utf-8"))
        assert "updatedAt" in stored
        assert stored["categories"][0]["id"] == "cat-x"

        reloaded = JsonFileGateway(path).load()
        assert reloaded.to_dict() == model.to_dict()

    def test_cleared_title_and_subtitle_survive_save(self, tmp_path):
        path = tmp_path / "expertise.json"
        model = GraphModel(categories=[Category(id="cat-x")])
        model.title = ""
        model.subtitle = ""
        JsonFileGateway(path).save(model)

        reloaded = JsonFileGateway(path).load()
        assert reloaded.title == ""
        assert reloaded.subtitle == ""

    def test_save_failure_is_reported(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        result = JsonFileGateway(blocker / "sub" / "g.json").save(GraphModel())
        assert result["success"] is False


class TestHttpGateway:
    """Tests for the admin API gateway, with a mocked requests session."""

    @staticmethod
    def make_response(status=200, body=None, json_error=False):
        response = MagicMock()
        response.status_code = status
        response.ok = 200 <= status < 400
        if json_error:
            response.json.side_effect = ValueError("bad json")
        else:
            response.json.return_value = body
        return response

    @pytest.fixture
    def session(self):
        return MagicMock(spec=requests.Session)

    def test_url_and_headers(self, session):
        gateway = HttpGateway("https://example.com/", token="secret", session=session)
        assert gateway.url == "https://example.com/api/admin/expertise"
        assert gateway.backend_type == "http"
        assert isinstance(gateway, GraphGateway)

        session.get.return_value = self.make_response(body={"success": True, "data": {}})
        gateway.load()
        _, kwargs = session.get.call_args
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    def test_load(self, session):
        body = {"success": True, "data": {"title": "Remote", "categories": [{"id": "c1", "angle": 10}]}}
        session.get.return_value = self.make_response(body=body)
        model = HttpGateway("https://example.com", session=session).load()
        assert model.title == "Remote"
        assert model.get_category("c1").angle == 10

    def test_not_found_gives_default_document(self, session):
        session.get.return_value = self.make_response(status=404)
        model = HttpGateway("https://example.com", session=session).load()
        assert model.title == DEFAULT_TITLE
        assert model.categories == []

    @pytest.mark.parametrize("response_kwargs", [
        {"status": 500},
        {"status": 200, "json_error": True},
        {"status": 200, "body": {"success": False, "error": "Unauthorized"}},
    ])
    def test_load_failures_raise(self, session, response_kwargs):
        session.get.return_value = self.make_response(**response_kwargs)
        with pytest.raises(PersistenceError):
            HttpGateway("https://example.com", session=session).load()

    def test_unreachable_raises(self, session):
        session.get.side_effect = requests.ConnectionError("down")
        with pytest.raises(PersistenceError):
            HttpGateway("https://example.com", session=session).load()

    def test_save_puts_whole_document(self, session):
        session.put.return_value = self.make_response()
        model = GraphModel(categories=[Category(id="c1")])
        result = HttpGateway("https://example.com", token="t", session=session).save(model)
        assert result["success"] is True
        args, kwargs = session.put.call_args
        assert args[0] == "https://example.com/api/admin/expertise"
        assert kwargs["json"] == model.to_dict()

    def test_save_failures(self, session):
        gateway = HttpGateway("https://example.com", session=session)
        session.put.return_value = self.make_response(status=401)
        assert gateway.save(GraphModel())["success"] is False
        session.put.side_effect = requests.Timeout("slow")
        assert gateway.save(GraphModel())["success"] is False


class TestFactory:

    def test_default_is_file(self, tmp_path):
        settings = Settings(data_path=str(tmp_path / "g.json"))
        assert get_backend_type(settings) == "file"
        gateway = create_gateway(settings)
        assert isinstance(gateway, JsonFileGateway)
        assert gateway.path == tmp_path / "g.json"

    def test_http(self):
        settings = Settings(storage_backend="http", api_url="https://example.com", admin_token="tok")
        gateway = create_gateway(settings)
        assert isinstance(gateway, HttpGateway)
        assert gateway.token == "tok"

    def test_http_requires_url(self):
        with pytest.raises(ValueError):
            create_gateway(Settings(storage_backend="http"))

    def test_force_backend(self, tmp_path):
        settings = Settings(storage_backend="http", data_path=str(tmp_path / "g.json"))
        assert isinstance(create_gateway(settings, force_backend="file"), JsonFileGateway)

    def test_unknown_backend_falls_back_to_file(self, tmp_path):
        settings = Settings(storage_backend="ftp", data_path=str(tmp_path / "g.json"))
        assert isinstance(create_gateway(settings), JsonFileGateway)
