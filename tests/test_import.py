"""Verify package imports work correctly."""


def test_import_rulelex() -> None:
    """Test that rulelex can be imported and version matches pyproject."""
    import tomllib
    from pathlib import Path

    import rulelex

    with (Path(__file__).resolve().parent.parent / "pyproject.toml").open("rb") as f:
        expected = tomllib.load(f)["project"]["version"]
    assert rulelex.__version__ == expected


def test_version_format() -> None:
    """Test version string format."""
    from rulelex import __version__

    parts = __version__.split(".")
    assert len(parts) == 3
    assert all(part.isdigit() for part in parts)


def test_public_names_resolve() -> None:
    """Every name in __all__ is importable from the package root."""
    import rulelex

    for name in rulelex.__all__:
        assert hasattr(rulelex, name), name


def test_get_logger_namespacing() -> None:
    """Module loggers stay under rulelex; foreign names are nested beneath it."""
    from rulelex.utils.logger import get_logger

    assert get_logger("rulelex").name == "rulelex"
    assert get_logger("rulelex.lexer").name == "rulelex.lexer"
    assert get_logger("grammar").name == "rulelex.grammar"
    assert get_logger("rulelexer").name == "rulelex.rulelexer"
