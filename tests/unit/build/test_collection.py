"""Tests that the build suite is reachable from a plain pytest run."""


def test_build_directories_are_collected(pytestconfig):
    """Test that 'build' is not among the directories pytest skips."""
    assert "build" not in pytestconfig.getini("norecursedirs")


def test_suite_rooted_at_tests(pytestconfig):
    assert pytestconfig.getini("testpaths") == ["tests"]
