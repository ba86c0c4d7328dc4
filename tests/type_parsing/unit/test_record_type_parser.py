"""Record-type parser tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from schema_reconciler.type_parsing import FieldDefinition, ParseError, parse


def test_parses_interfaces_and_object_type_aliases() -> None:
    declarations = parse(
        """
        export interface User {
          id: number;
          name?: string;
          readonly tags: string[];
        }

        type Page = {
          items: User[],
          total: number
        };
        """
    )

    assert list(declarations) == ["User", "Page"]
    assert declarations["User"].fields == {
        "id": FieldDefinition(name="id", type_text="number", optional=False),
        "name": FieldDefinition(name="name", type_text="string", optional=True),
        "tags": FieldDefinition(name="tags", type_text="string[]", optional=False),
    }
    assert declarations["Page"].field_names == ("items", "total")


def test_members_may_be_separated_by_newlines_only() -> None:
    declarations = parse(
        """
        interface Settings {
          theme: 'dark' | 'light'
          retries: number
          owner: {
            id: number
            email?: string
          }
        }
        """
    )

    settings = declarations["Settings"]
    assert settings.field_names == ("theme", "retries", "owner")
    assert settings.fields["theme"].type_text == "'dark' | 'light'"
    assert settings.fields["owner"].type_text.startswith("{")


def test_multiline_unions_stay_in_one_member() -> None:
    declarations = parse(
        """
        interface Status {
          state:
            | 'pending'
            | 'done'
          note: string | null
        }
        """
    )

    fields = declarations["Status"].fields
    assert fields["state"].type_text == "'pending' | 'done'"
    assert fields["note"].type_text == "string | null"


def test_generics_quoted_keys_and_comments_are_handled() -> None:
    declarations = parse(
        """
        // leading comment with { braces
        interface Envelope<T extends object = {}> extends Base<T> {
          /** Payload body */
          data: Map<string, T>;
          'content-type': string;
          "x-trace"?: string;
          count // untyped member
        }
        """
    )

    envelope = declarations["Envelope"]
    assert envelope.field_names == ("data", "content-type", "x-trace", "count")
    assert envelope.fields["data"].type_text == "Map<string, T>"
    assert envelope.fields["x-trace"].optional is True
    assert envelope.fields["count"].type_text == "any"


def test_methods_and_index_signatures_are_skipped() -> None:
    declarations = parse(
        """
        interface Handler {
          name: string;
          handle(event: string): void;
          [key: string]: unknown;
          callback: (value: number) => void;
        }
        """
    )

    handler = declarations["Handler"]
    assert handler.field_names == ("name", "callback")
    assert handler.fields["callback"].type_text == "(value: number) => void"


def test_non_object_aliases_are_ignored() -> None:
    declarations = parse(
        """
        type Id = string;
        type Alias = Other;
        type Maybe = { value: string } | null;
        interface Real { id: Id }
        """
    )

    assert list(declarations) == ["Real"]


def test_empty_source_yields_no_declarations() -> None:
    assert parse("") == {}
    assert parse("const answer = 42;") == {}


def test_unbalanced_braces_raise_parse_error() -> None:
    with pytest.raises(ParseError, match="Unclosed '\\{'"):
        parse("interface Broken {\n  id: number;\n")


def test_unexpected_closer_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="line 2"):
        parse("interface A { id: number }\n}")


def test_unterminated_string_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="Unterminated string"):
        parse("interface A { 'id: number }")


def test_sample_types_file_parses() -> None:
    sample = Path(__file__).resolve().parents[3] / "samples" / "sample-types.ts"

    declarations = parse(sample.read_text(encoding="utf-8"))

    assert list(declarations) == [
        "OrderListResponse",
        "Order",
        "Customer",
        "OrderItem",
        "AuditEntry",
    ]
    assert declarations["OrderListResponse"].fields["errors"].type_text == "string[] | null"
    assert declarations["Customer"].field_names == ("id", "name")


@pytest.mark.parametrize(
    "prelude",
    [
        "const pattern = /[(]/;",
        "const quote = /'/g;",
        'const parts = text.split(/["{]/);',
        "const ratio = total / count / 2;",
    ],
)
def test_regex_literals_and_division_do_not_break_declarations(prelude: str) -> None:
    declarations = parse(f"{prelude}\ninterface User {{\n  id: string;\n}}\n")

    assert declarations["User"].field_names == ("id",)


def test_object_type_arguments_in_heritage_clause_are_not_the_body() -> None:
    declarations = parse("interface User extends Base<{ tag: string }> {\n  id: string;\n}\n")

    assert declarations["User"].field_names == ("id",)


def test_index_signature_on_next_line_starts_a_new_member() -> None:
    declarations = parse(
        "interface Bag {\n  name: string\n  [key: string]: unknown\n  size: number\n}\n"
    )

    assert declarations["Bag"].field_names == ("name", "size")
    assert declarations["Bag"].fields["name"].type_text == "string"
