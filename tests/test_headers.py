from import_engine.headers import validate_headers
from import_engine.table_map import headers_for


def test_exact_headers_are_valid():
    check = validate_headers("CLIENTS", headers_for("CLIENTS"))

    assert not check.fatal
    assert check.valid
    assert check.missing_columns == []
    assert check.extra_columns == []


def test_unknown_table_is_fatal():
    check = validate_headers("UNKNOWN_TABLE", ["ID", "Name"])

    assert check.fatal
    assert "UNKNOWN_TABLE" in check.message


def test_missing_primary_key_is_fatal():
    check = validate_headers("CLIENTS", ["Name", "City"])

    assert check.fatal
    assert "'ID'" in check.message


def test_missing_and_extra_columns_are_advisory():
    check = validate_headers("CLIENTS", ["ID", "Name", "Website"])

    assert not check.fatal
    assert "LegalName" in check.missing_columns
    assert "TaxID" in check.missing_columns
    assert check.extra_columns == ["Website"]


def test_header_order_does_not_matter():
    headers = list(reversed(headers_for("COLLABORATORS")))

    check = validate_headers("COLLABORATORS", headers)

    assert not check.fatal
    assert check.missing_columns == [] and check.extra_columns == []
