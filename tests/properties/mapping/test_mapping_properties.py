from hypothesis import assume, given, strategies as st

from docgen.mapping import (
    build_field_name,
    get_nested_value,
    java_string_hash,
    split_arguments,
    stringify,
)
from docgen.templates import IndexPosition, RepeatingGroupSpec

plain_token = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789._ ", max_size=12)
quoted_body = st.text(alphabet="abc ,.:/-[]()", max_size=12)
identifier = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,8}", fullmatch=True)


@given(tokens=st.lists(plain_token, min_size=1, max_size=6))
def test_split_arguments_on_plain_commas(tokens: list[str]) -> None:
    text = ",".join(tokens)
    assume(text.strip())

    assert split_arguments(text) == [token.strip() for token in tokens]


@given(head=plain_token, body=quoted_body)
def test_quoted_argument_is_never_split(head: str, body: str) -> None:
    assume(head.strip())

    parts = split_arguments(f"{head},'{body}'")

    assert parts == [head.strip(), f"'{body}'".strip()]


@given(
    prefix=st.one_of(st.none(), identifier),
    separator=st.sampled_from([None, "", ".", "_"]),
    position=st.sampled_from(list(IndexPosition)),
    index=st.integers(min_value=0, max_value=99),
    name=identifier,
)
def test_field_name_contains_its_parts(
    prefix: str | None,
    separator: str | None,
    position: IndexPosition,
    index: int,
    name: str,
) -> None:
    spec = RepeatingGroupSpec(
        prefix=prefix, index_separator=separator, index_position=position
    )

    field_name = build_field_name(spec, index, name)

    assert field_name.startswith(prefix or "")
    assert name in field_name
    assert str(index) in field_name
    expected_length = len(prefix or "") + len(separator or "") + len(str(index))
    assert len(field_name) == expected_length + len(name)


@given(value=st.text())
def test_java_string_hash_is_signed_32_bit(value: str) -> None:
    assert -(2**31) <= java_string_hash(value) < 2**31


@given(values=st.lists(st.text(alphabet="abc xyz", max_size=5), max_size=5))
def test_stringify_joins_lists(values: list[str]) -> None:
    assert stringify(values) == ", ".join(values)


@given(
    keys=st.lists(identifier, min_size=1, max_size=4),
    value=st.one_of(st.integers(), st.text(max_size=5), st.booleans()),
)
def test_get_nested_value_finds_what_was_nested(keys: list[str], value: object) -> None:
    data: object = value
    for key in reversed(keys):
        data = {key: data}

    assert get_nested_value(data, ".".join(keys)) == value
