"""Unit tests for errors.py"""

from pathlib import Path

from mdsite.errors import DocumentError, MdsiteError, MissingField, NotFound, RouteError, UnknownNodeVariant


def test_document_errors_carry_source():
    err = NotFound("source does not exist or is not a file", Path("ch1.md"))
    assert err.source == Path("ch1.md")
    assert str(err).startswith("ch1.md: ")


def test_missing_field_is_a_route_error():
    err = MissingField("permalink")
    assert isinstance(err, RouteError)
    assert err.field == "permalink"
    assert "permalink" in str(err)


def test_unknown_node_variant_is_not_per_document():
    """The build only isolates DocumentError; UnknownNodeVariant sits outside it."""
    err = UnknownNodeVariant(object(), "html")
    assert isinstance(err, MdsiteError)
    assert not isinstance(err, DocumentError)
