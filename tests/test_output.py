import io
import sys
from datetime import timedelta

import pytest

from monarchcli.errors import ErrorCategory, ErrorCode, MonarchError
from monarchcli.output import (
    SCHEMA_VERSION,
    Renderer,
    new_envelope,
    new_error_envelope,
)


def _boom():
    return MonarchError(ErrorCode.API_ERROR, "boom", ErrorCategory.API)


def test_render_success():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, True, False)
    env = new_envelope("test", "default", SCHEMA_VERSION, "req-123", {"foo": "bar"}, timedelta(milliseconds=10))
    renderer.render_success(env)
    out = stdout.getvalue()
    assert '"ok":true' in out
    assert '"data":{"foo":"bar"}' in out
    assert '"request_id":"req-123"' in out
    assert '"duration_ms":10' in out


def test_render_success_pretty():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, True, True)
    env = new_envelope("test", "default", SCHEMA_VERSION, "", {"foo": "bar"}, timedelta(seconds=1))
    renderer.render_success(env)
    assert '\n  "ok": true' in stdout.getvalue()


def test_render_success_non_json():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, False, False)
    renderer.render_success(new_envelope("test", "default", SCHEMA_VERSION, "", "value", timedelta(0)))
    assert stdout.getvalue() == ""


def test_render_success_marshal_error():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, True, False)
    env = new_envelope("test", "default", SCHEMA_VERSION, "", object(), timedelta(0))
    with pytest.raises(TypeError):
        renderer.render_success(env)
    assert stdout.getvalue() == ""


def test_render_error_json():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, True, False)
    env = new_error_envelope("test", "default", SCHEMA_VERSION, _boom(), timedelta(milliseconds=10))
    renderer.render_error(env)
    out = stdout.getvalue()
    assert '"ok":false' in out
    assert '"message":"boom"' in out


def test_render_error_text_and_diagnostic():
    stderr = io.StringIO()
    renderer = Renderer(None, stderr, False, False)
    env = new_error_envelope("test", "default", SCHEMA_VERSION, _boom(), timedelta(0))
    renderer.render_error(env)
    renderer.print_diagnostic("hello")
    assert "Error: boom" in stderr.getvalue()
    assert "hello" in stderr.getvalue()


def test_render_error_pretty():
    stdout = io.StringIO()
    renderer = Renderer(stdout, None, True, True)
    env = new_error_envelope("test", "default", SCHEMA_VERSION, _boom(), timedelta(0))
    renderer.render_error(env)
    assert '\n  "ok": false' in stdout.getvalue()


def test_new_renderer_defaults():
    renderer = Renderer()
    assert renderer.stdout is sys.stdout
    assert renderer.stderr is sys.stderr


def test_empty_request_id_is_omitted():
    stdout = io.StringIO()
    Renderer(stdout, None, True, False).render_success(
        new_envelope("test", "default", SCHEMA_VERSION, "", {"foo": "bar"}, timedelta(0))
    )
    assert "request_id" not in stdout.getvalue()


def test_none_data_is_omitted():
    env = new_envelope("test", "default", SCHEMA_VERSION, "", None, timedelta(0))
    assert "data" not in env.to_dict()
    assert env.to_dict()["meta"]["schema_version"] == SCHEMA_VERSION


def test_error_envelope_to_dict():
    env = new_error_envelope("cmd", "p", SCHEMA_VERSION, _boom(), timedelta(milliseconds=3))
    data = env.to_dict()
    assert data["ok"] is False
    assert data["error"]["message"] == "boom"
    assert data["meta"]["command"] == "cmd"
    assert data["meta"]["duration_ms"] == 3