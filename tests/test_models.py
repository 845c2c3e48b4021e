"""Presentation model tests"""

import textwrap

import pytest
import yaml
from pydantic import ValidationError

from tmuxpresenter.models import Action, ActionKind, Layout, Presentation


def _document(**overrides) -> dict:
    doc = {
        "metadata": {"name": "Demo"},
        "layout": {
            "sessionName": "demo",
            "panes": [{"id": "p0", "title": "Left"}, {"id": "p1", "title": "Right"}],
        },
        "steps": [{"id": "s1", "title": "One", "actions": [{"type": "pause", "duration": 5}]}],
    }
    doc.update(overrides)
    return doc


def test_camel_case_document():
    """camelCase keys map onto snake_case fields"""
    doc = _document(
        layout={
            "sessionName": "demo",
            "terminal": {"spawn": True, "fontSize": 14, "maximize": True},
            "panes": [{"id": "p0", "title": "Only", "defaultFocus": True, "initialCommand": "ls"}],
        }
    )
    presentation = Presentation.model_validate(doc)

    layout = presentation.layout
    assert layout.session_name == "demo"
    assert layout.spawns_terminal is True
    assert layout.terminal.font_size == 14
    assert layout.default_focus_pane().initial_command == "ls"
    assert presentation.total_steps == 1
    assert presentation.environment.variables == []


def test_duplicate_pane_ids_rejected():
    panes = [{"id": "p0", "title": "A"}, {"id": "p0", "title": "B"}]
    with pytest.raises(ValidationError, match="duplicate pane id 'p0'"):
        Layout.model_validate({"sessionName": "demo", "panes": panes})


def test_single_default_focus():
    panes = [
        {"id": "p0", "title": "A", "defaultFocus": True},
        {"id": "p1", "title": "B", "defaultFocus": True},
    ]
    with pytest.raises(ValidationError, match="defaultFocus"):
        Layout.model_validate({"sessionName": "demo", "panes": panes})


def test_steps_required():
    with pytest.raises(ValidationError):
        Presentation.model_validate(_document(steps=[]))


def test_unknown_action_type_loads():
    """Unknown kinds are rejected when the action runs, not at load time"""
    action = Action.model_validate({"type": "teleport", "pane": "p0"})
    assert action.kind is None
    assert action.describe() == "teleport@p0"


def test_action_fields():
    data = yaml.safe_load(
        textwrap.dedent(
            """
        type: capture
        pane: p2
        pattern: 'hkdk\\.events/[a-z0-9]+'
        variable: URL
        timeout: 5000
        skipResize: true
        """
        )
    )
    action = Action.model_validate(data)
    assert action.kind is ActionKind.CAPTURE
    assert action.skip_resize is True
    assert action.timeout == 5000
    assert action.pattern == "hkdk\\.events/[a-z0-9]+"


def test_required_fields_table():
    assert ActionKind.COMMAND.required_fields == ("pane", "command")
    assert ActionKind.CAPTURE.required_fields == ("pane", "pattern", "variable")
    assert ActionKind.PAUSE.required_fields == ("duration",)
    assert all(kind.required_fields is not None for kind in ActionKind)


def test_models_are_frozen():
    action = Action(type="focus", pane="p0")
    with pytest.raises(ValidationError):
        action.pane = "p1"
