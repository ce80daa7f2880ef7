"""Tests for the path matcher."""

import pytest

from reqtrace.api.matcher import PathMatcher


@pytest.fixture
def default_matcher() -> PathMatcher:
    return PathMatcher.from_excluded_prefixes()


@pytest.mark.parametrize(
    "path",
    ["/api", "/api/users", "/api/users/1/posts", "/", "/dashboard", "/health"],
)
def test_matches_api_and_page_paths(default_matcher, path):
    assert default_matcher.matches(path)


@pytest.mark.parametrize(
    "path",
    ["/static/app.css", "/static/js/main.js", "/favicon.ico", "/public/logo.png"],
)
def test_excludes_assets(default_matcher, path):
    assert not default_matcher.matches(path)


def test_prefix_must_be_at_path_start(default_matcher):
    assert default_matcher.matches("/docs/static/readme")


def test_api_paths_match_even_when_excluded():
    matcher = PathMatcher.from_excluded_prefixes(["/api/"])
    assert matcher.matches("/api/users")


def test_no_exclusions_matches_everything():
    matcher = PathMatcher.from_excluded_prefixes([])
    assert matcher.matches("/static/app.css")


def test_prefixes_are_escaped():
    matcher = PathMatcher.from_excluded_prefixes(["/a.b/"])
    assert not matcher.matches("/a.b/file")
    assert matcher.matches("/axb/file")


def test_explicit_patterns():
    matcher = PathMatcher([r"/only/\d+"])
    assert matcher.matches("/only/42")
    assert not matcher.matches("/only/42/more")
    assert "/only" in repr(matcher)


def test_excluded_prefix_has_no_segment_boundary(default_matcher):
    # Prefixes are plain string prefixes, not path segments
    assert not default_matcher.matches("/favicon.icons/x")
    assert default_matcher.matches("/publicity")
