"""Tests for the render result wrapper."""

from photo_stories.app.render import RenderError, RenderResult, render_safely


def _build(count, suffix="!"):
    return f"{count} photos{suffix}"


def _explode():
    raise KeyError("photos")


class TestRenderSafely:
    def test_ok(self):
        result = render_safely(_build, 3, suffix="?")

        assert result.is_ok
        assert result.value == "3 photos?"

    def test_captures_exception(self):
        result = render_safely(_explode, title="Error Loading Trip")

        assert not result.is_ok
        assert result.value is None
        assert result.error.title == "Error Loading Trip"
        assert "photos" in result.error.message
        assert isinstance(result.error.exception, KeyError)

    def test_default_title(self):
        assert render_safely(_explode).error.title == "Something went wrong"


class TestRenderResult:
    def test_constructors(self):
        assert RenderResult.ok(5).is_ok
        assert not RenderResult.err(RenderError("t", "m")).is_ok
