"""Tests for the declaration scanner and annotation naming."""

from goswagtags.annotate import AnnotationOptions, annotate_file
from goswagtags.annotate.naming import (
    annotation_comment,
    enclosing_function,
    is_annotation_group,
    to_camel,
)
from goswagtags.ast import FuncDecl, GenDecl
from goswagtags.parser import parse_source
from goswagtags.processor import ProcessOptions, process_source


def _render(source: str, **annotation) -> str:
    options = ProcessOptions(annotation=AnnotationOptions(**annotation))
    return process_source(source, "model.go", options).output


def test_exported_struct_gets_doc_annotation() -> None:
    source_file = parse_source("package main\n\ntype Order struct {\n\tID int\n}\n")

    annotations = annotate_file(source_file)

    assert [a.name for a in annotations] == ["Order"]
    decl = source_file.decls[0]
    assert decl.doc is annotations[0].group
    assert decl.doc.synthetic
    assert source_file.comments == [decl.doc]
    assert annotations[0].location.line == 3


def test_non_struct_and_unexported_types_are_skipped() -> None:
    source = (
        "package main\n"
        "\n"
        "type Status string\n"
        "\n"
        "type order struct{}\n"
        "\n"
        "type Alias = Status\n"
    )

    assert _render(source) == source


def test_local_struct_is_skipped_by_default() -> None:
    source = "package main\n\nfunc Handler() {\n\ttype Reply struct{}\n\t_ = Reply{}\n}\n"

    assert _render(source) == source


def test_existing_annotation_in_doc_or_trailing_comment() -> None:
    source = (
        "package main\n"
        "\n"
        "// Order is an order.\n"
        "// @name Order\n"
        "type Order struct{}\n"
        "\n"
        "type Item struct{} // @name Item\n"
    )

    assert _render(source) == source


def test_annotation_with_other_name_is_not_a_match() -> None:
    source = (
        "package main\n"
        "\n"
        "// Order doc.\n"
        "// @name Purchase\n"
        "type Order struct{}\n"
    )

    assert _render(source) == (
        "package main\n"
        "\n"
        "// Order doc.\n"
        "// @name Purchase\n"
        "// @name Order\n"
        "type Order struct{}\n"
    )


def test_stale_annotation_is_replaced() -> None:
    source = "package main\n\n// @name OldName\ntype NewName struct{}\n"

    assert _render(source) == "package main\n\n// @name NewName\ntype NewName struct{}\n"


def test_stale_annotation_is_kept_on_request() -> None:
    source = "package main\n\n// @name OldName\ntype NewName struct{}\n"

    assert _render(source, prune_stale=False) == (
        "package main\n\n// @name OldName\n// @name NewName\ntype NewName struct{}\n"
    )


def test_compound_name_for_local_struct() -> None:
    source = "package main\n\nfunc GetAppList() {\n\ttype Res struct{}\n}\n"

    assert _render(source, compound_names=True) == (
        "package main\n\nfunc GetAppList() {\n\t// @name GetAppListRes\n\ttype Res struct{}\n}\n"
    )


def test_compound_name_breaks_one_line_body() -> None:
    source = "package main\n\nfunc GetAppList() { type Res struct{} }\n"

    assert _render(source, compound_names=True) == (
        "package main\n\nfunc GetAppList() {\n\t// @name GetAppListRes\n\ttype Res struct{} }\n"
    )


def test_compound_output_is_stable() -> None:
    source = "package main\n\nfunc GetAppList() {\n\ttype Res struct{}\n}\n"

    once = _render(source, compound_names=True)

    assert _render(once, compound_names=True) == once


def test_function_literal_locals_stay_skipped_in_compound_mode() -> None:
    source = "package main\n\nvar handler = func() {\n\ttype Payload struct{}\n}\n"

    assert _render(source, compound_names=True) == source


def test_to_camel() -> None:
    assert to_camel("GetAppList_Res") == "GetAppListRes"
    assert to_camel("list_user_reply") == "ListUserReply"
    assert to_camel("already") == "Already"
    assert to_camel("") == ""


def test_enclosing_function_prefers_first_match() -> None:
    outer = FuncDecl(pos=0, end=100, name="Outer")
    other = FuncDecl(pos=10, end=90, name="Other")
    decl = GenDecl(pos=20, end=30, tok="type")

    assert enclosing_function([outer, other], decl) is outer
    assert enclosing_function([other], GenDecl(pos=95, end=99, tok="type")) is None


def test_is_annotation_group() -> None:
    source_file = parse_source(
        "package main\n\n// @name A\n// @name B\ntype A struct{}\n\n// @name C\n// text\ntype C struct{}\n"
    )
    only_tags, mixed = source_file.comments

    assert is_annotation_group(only_tags)
    assert not is_annotation_group(mixed)
    assert annotation_comment("A") == "// @name A"
