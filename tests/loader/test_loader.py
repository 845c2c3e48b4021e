"""Config loader tests"""

import textwrap

import pytest

from tmuxpresenter.errors import ConfigError, MissingEnvVar
from tmuxpresenter.loader import (
    load_env_file,
    load_presentation,
    parse_presentation,
    resolve_environment,
    resolve_working_directory,
)


def _with_environment(environment: dict):
    return parse_presentation(
        {
            "metadata": {"name": "Demo"},
            "environment": environment,
            "layout": {"sessionName": "demo", "panes": [{"id": "p0", "title": "Only"}]},
            "steps": [{"id": "s", "title": "S", "actions": [{"type": "pause", "duration": 1}]}],
        }
    )


class TestLoadPresentation:
    def test_load(self, presentation_file):
        presentation = load_presentation(presentation_file)

        assert presentation.metadata.name == "Webhook Demo"
        assert [p.id for p in presentation.layout.panes] == ["p0", "p1", "p2"]
        assert presentation.steps[0].speaker_notes == "Say hello"
        assert presentation.total_steps == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Configuration file not found"):
            load_presentation(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("metadata: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="invalid YAML"):
            load_presentation(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(ConfigError, match="must be a mapping"):
            load_presentation(path)

    def test_schema_error_names_location(self, tmp_path):
        path = tmp_path / "dup.yaml"
        path.write_text(
            textwrap.dedent(
                """
                metadata: {name: Demo}
                layout:
                  sessionName: demo
                  panes:
                    - {id: p0, title: A}
                    - {id: p0, title: B}
                steps:
                  - id: s
                    title: S
                    actions: [{type: pause, duration: 1}]
                """
            ),
            encoding="utf-8",
        )

        with pytest.raises(ConfigError) as exc_info:
            load_presentation(path)

        assert exc_info.value.location == "layout"
        assert "duplicate pane id 'p0'" in str(exc_info.value)

    def test_missing_name(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_presentation(
                {
                    "metadata": {},
                    "layout": {"sessionName": "demo", "panes": [{"id": "p0", "title": "A"}]},
                    "steps": [
                        {"id": "s", "title": "S", "actions": [{"type": "pause", "duration": 1}]}
                    ],
                }
            )
        assert exc_info.value.location == "metadata.name"


class TestEnvironment:
    def test_load_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("API_KEY=secret\n# comment\nQUOTED=\"a b\"\n", encoding="utf-8")

        assert load_env_file(env_file) == {"API_KEY": "secret", "QUOTED": "a b"}

    def test_load_env_file_missing(self, tmp_path):
        assert load_env_file(tmp_path / ".env") == {}

    def test_required_from_source(self, tmp_path):
        (tmp_path / ".env").write_text("API_KEY=secret\nOTHER=1\n", encoding="utf-8")
        presentation = _with_environment(
            {"variables": [{"name": "API_KEY", "required": True, "source": ".env"}]}
        )

        env = resolve_environment(presentation, tmp_path, environ={})
        assert env == {"API_KEY": "secret", "OTHER": "1"}

    def test_required_from_host_environment(self, tmp_path):
        presentation = _with_environment({"variables": [{"name": "TOKEN", "required": True}]})

        env = resolve_environment(presentation, tmp_path, environ={"TOKEN": "abc"})
        assert env == {"TOKEN": "abc"}

    def test_required_missing(self, tmp_path):
        presentation = _with_environment(
            {
                "variables": [
                    {"name": "TOKEN", "required": True, "description": "Get one from the dashboard"}
                ]
            }
        )

        with pytest.raises(MissingEnvVar) as exc_info:
            resolve_environment(presentation, tmp_path, environ={"TOKEN": ""})

        assert exc_info.value.name == "TOKEN"
        assert "Get one from the dashboard" in str(exc_info.value)

    def test_optional_missing_is_fine(self, tmp_path):
        presentation = _with_environment({"variables": [{"name": "OPTIONAL"}]})
        assert resolve_environment(presentation, tmp_path, environ={}) == {}

    def test_working_directory(self, tmp_path):
        (tmp_path / "demo").mkdir()
        presentation = _with_environment({"workingDirectory": "./demo"})
        assert resolve_working_directory(presentation, tmp_path) == (tmp_path / "demo").resolve()

        default = _with_environment({})
        assert resolve_working_directory(default, tmp_path) == tmp_path.resolve()
