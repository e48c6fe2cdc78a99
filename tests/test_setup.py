"""Basic test to verify setup is working."""

import roster_grader.analyzer


def test_basic_setup() -> None:
    """Test that basic Python functionality works."""
    assert True


def test_imports() -> None:
    """Test that we can import from the roster_grader package."""
    assert roster_grader.analyzer.analyze_roster is not None
