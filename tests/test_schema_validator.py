import pytest

from envgate import SchemaDefinitionError
from envgate.schema import (
    adapt_strictness,
    any_value,
    boolean,
    enum,
    env_object,
    field,
    integer,
    is_record_schema,
    list_of,
    number,
    optional,
    refine,
    string,
    transform,
    union,
    url,
    validate,
)


@pytest.mark.parametrize("raw, expected", [("42", 42), (" 7 ", 7), ("1e3", 1000), (5, 5), (5.0, 5)])
def test_integer_coercion(raw, expected):
    result = validate(integer(), raw)

    assert result.ok
    assert result.value == expected


@pytest.mark.parametrize("raw", ["4.5", "abc", "", True, "nan"])
def test_integer_rejects_invalid_values(raw):
    assert not validate(integer(), raw).ok


def test_integer_without_coercion_rejects_strings():
    result = validate(integer(coerce=False), "42")

    assert result.issues[0].message == "Expected integer, received string"


def test_number_bounds():
    assert validate(number(minimum=0.5, maximum=1.5), "1.25").value == 1.25
    assert validate(number(minimum=0.5), "0.1").issues[0].message == "Number must be greater than or equal to 0.5"
    assert validate(integer(maximum=10), "11").issues[0].message == "Number must be less than or equal to 10"


@pytest.mark.parametrize("raw, expected", [("true", True), ("FALSE", False), ("1", True), ("off", False), (True, True)])
def test_boolean_coercion(raw, expected):
    assert validate(boolean(), raw).value is expected


def test_boolean_rejects_unknown_spelling():
    assert validate(boolean(), "maybe").issues[0].message == "Expected boolean, received 'maybe'"


def test_string_constraints():
    assert validate(string(min_length=3), "ab").issues[0].message == "String must contain at least 3 character(s)"
    assert validate(string(max_length=1), "ab").issues[0].message == "String must contain at most 1 character(s)"
    assert not validate(string(pattern=r"^sk_"), "pk_123").ok
    assert validate(string(), 8080).value == "8080"


@pytest.mark.parametrize("raw, ok", [("https://example.com/db", True), ("postgres://u:p@db:5432/app", True), ("not-a-url", False)])
def test_url(raw, ok):
    assert validate(url(), raw).ok is ok


def test_enum():
    assert validate(enum("debug", "info"), "info").value == "info"
    assert validate(enum("debug", "info"), "loud").issues[0].message == (
        "Invalid enum value. Expected 'debug' | 'info', received 'loud'"
    )


def test_any_value_passes_through():
    marker = object()

    assert validate(any_value(), marker).value is marker


def test_list_splits_strings_and_reports_item_paths():
    result = validate(env_object({"PORTS": list_of(integer())}), {"PORTS": "80, 443,x"})

    assert [(i.dotted_path, i.message) for i in result.issues] == [("PORTS.2", "Expected integer, received 'x'")]


def test_list_min_items():
    assert not validate(list_of(string(), min_items=1), "").ok


def test_union_takes_first_matching_option():
    spec = union(integer(), boolean())

    assert validate(spec, "3").value == 3
    assert validate(spec, "yes").value is True
    assert validate(spec, "nope").issues[0].message == "Value does not match any allowed schema"


def test_transform_errors_become_issues():
    def parse_pair(value):
        left, right = value.split(":")
        return left, right

    assert validate(transform(string(), parse_pair), "a:b").value == ("a", "b")
    assert not validate(transform(string(), parse_pair), "abc").ok


def test_refine():
    spec = refine(integer(), lambda v: v % 2 == 0, "Must be even")

    assert validate(spec, "4").value == 4
    assert validate(spec, "3").issues[0].message == "Must be even"


def test_object_collects_every_issue():
    schema = env_object({"A": integer(), "B": url(), "C": string()})

    result = validate(schema, {"A": "x", "B": "y"})

    assert [i.dotted_path for i in result.issues] == ["A", "B", "C"]
    assert result.issues[2].message == "Required"


def test_object_defaults_are_validated():
    schema = env_object({"PORT": field(integer(), default="3000"), "NAME": optional(string())})

    assert validate(schema, {}).value == {"PORT": 3000, "NAME": None}


def test_nested_object_paths():
    schema = env_object({"DB": env_object({"PORT": integer()})})

    result = validate(schema, {"DB": {"PORT": "x"}})

    assert result.issues[0].dotted_path == "DB.PORT"


def test_non_mapping_for_object():
    assert validate(env_object({}), "x").issues[0].message == "Expected object, received string"


def test_unknown_spec_is_a_definition_error():
    with pytest.raises(SchemaDefinitionError):
        validate(object(), {})


def test_strictness_only_applies_to_records():
    record = env_object({"A": string()})
    scalar = string()
    wrapped = transform(record, dict)

    assert is_record_schema(record)
    assert not is_record_schema(wrapped)
    assert adapt_strictness(record, True).allow_extra is False
    assert adapt_strictness(record, False) is record
    assert adapt_strictness(scalar, True) is scalar
    assert adapt_strictness(wrapped, True) is wrapped


def test_strict_record_reports_each_unknown_key():
    strict = adapt_strictness(env_object({"A": string()}), True)

    result = validate(strict, {"A": "a", "B": "b", "C": "c"})

    assert [(i.dotted_path, i.message) for i in result.issues] == [
        ("B", "Unrecognized key 'B'"),
        ("C", "Unrecognized key 'C'"),
    ]
