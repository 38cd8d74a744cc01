from unittest.mock import MagicMock

import pytest

from orbit.editor import EditorSession
from orbit.geometry import Point
from orbit.model import Category, GraphModel
from orbit.storage import JsonFileGateway, PersistenceError


def test_session_without_gateway():
    session = EditorSession()
    assert session.load() is False
    assert session.save()["success"] is False


def test_load_replaces_content_in_place(tmp_path, model):
    path = tmp_path / "g.json"
    JsonFileGateway(path).save(GraphModel(title="Stored", categories=[Category(id="cat-z", radius=50)]))

    session = EditorSession(JsonFileGateway(path), model=model)
    session.inspector.select("cat-a")
    assert session.load() is True
    assert session.model is model
    assert model.title == "Stored"
    assert [c.id for c in model.categories] == ["cat-z"]
    assert session.inspector.selected_id is None


def test_load_failure_keeps_model(model):
    gateway = MagicMock()
    gateway.load.side_effect = PersistenceError("boom")
    session = EditorSession(gateway, model=model)
    assert session.load() is False
    assert session.last_error == "boom"
    assert model.get_category("cat-a") is not None


def test_apply_loaded_ends_active_drag(model):
    session = EditorSession(model=model)
    session.controller.pointer_down(Point(600, 400))
    session.apply_loaded(GraphModel())
    assert not session.controller.state.is_dragging
    assert model.categories == []


def test_save_reports_gateway_result(tmp_path, model):
    path = tmp_path / "g.json"
    session = EditorSession(JsonFileGateway(path), model=model)
    result = session.save()
    assert result["success"] is True
    assert session.last_error is None
    assert not session.is_saving
    assert JsonFileGateway(path).load().to_dict() == model.to_dict()


def test_save_failure_sets_last_error(model):
    gateway = MagicMock()
    gateway.save.return_value = {"success": False, "message": "Save failed (HTTP 401)"}
    session = EditorSession(gateway, model=model)
    assert session.save()["success"] is False
    assert session.last_error == "Save failed (HTTP 401)"


def test_overlapping_save_is_rejected(model):
    session = EditorSession(MagicMock(), model=model)
    session.is_saving = True
    result = session.save()
    assert result["success"] is False
    session.gateway.save.assert_not_called()


def test_zoom_changes_pointer_mapping(model):
    session = EditorSession(model=model)
    assert session.zoom_in() == 1.1
    session.set_zoom(2.0)
    session.controller.pointer_down(Point(1200, 800))
    assert session.controller.state.node_id == "cat-a"
    assert session.reset_zoom() == 1.0


def test_zoom_out_floor():
    session = EditorSession()
    for _ in range(10):
        session.zoom_out()
    assert session.zoom == 0.5


def test_viewport_letterbox(model):
    session = EditorSession(model=model)
    session.set_viewport(2000, 800)
    # canvas fits at scale 1 with 500px side bars
    session.controller.pointer_down(Point(1100, 400))
    assert session.controller.state.node_id == "cat-a"


def test_chart_options_disable_animation_while_dragging(model):
    session = EditorSession(model=model)
    assert session.chart_options()["animation"] is True
    session.controller.pointer_down(Point(600, 400))
    assert session.chart_options()["animation"] is False


def test_add_category_selects_it():
    session = EditorSession()
    cat = session.add_category()
    assert session.inspector.selected_id == cat.id
