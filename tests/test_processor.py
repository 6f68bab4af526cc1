"""End-to-end tests for the per-file pipeline and path selection."""

import io
import os
import stat

import pytest

from goswagtags.errors import GoParseError
from goswagtags.files import is_source_path, iter_source_files
from goswagtags.processor import ProcessOptions, process_file, process_source, run, write_file


def test_names_matches_golden(names_source, names_golden) -> None:
    result = process_source(names_source, "names.go")

    assert result.output == names_golden
    assert result.changed
    assert [a.name for a in result.annotations] == [
        "Name1",
        "Name2",
        "Name3",
        "GetAppListRes",
        "GetServiceRes",
    ]


def test_golden_is_a_fixed_point(names_golden) -> None:
    result = process_source(names_golden, "names.go")

    assert result.output == names_golden
    assert not result.changed
    assert result.annotations == []


def test_single_struct() -> None:
    source = "package main\n\ntype GetServiceRes struct { Name string }\n"

    result = process_source(source)

    assert result.output == (
        "package main\n\n// @name GetServiceRes\ntype GetServiceRes struct { Name string }\n"
    )


def test_comment_order_is_preserved() -> None:
    source = (
        "package main\n"
        "\n"
        "// Banner.\n"
        "\n"
        "// Item doc.\n"
        "type Item struct {\n"
        "} // trailing\n"
    )

    output = process_source(source).output

    assert output == (
        "package main\n"
        "\n"
        "// Banner.\n"
        "\n"
        "// Item doc.\n"
        "// @name Item\n"
        "type Item struct {\n"
        "} // trailing\n"
    )
    banner = output.index("// Banner.")
    doc = output.index("// Item doc.")
    tag = output.index("// @name Item")
    trailing = output.index("// trailing")
    assert banner < doc < tag < trailing


def test_parse_error_names_file() -> None:
    with pytest.raises(GoParseError) as excinfo:
        process_source("package main\n\ntype X struct {\n", "bad.go")

    assert str(excinfo.value).startswith("bad.go:")


@pytest.mark.parametrize(
    "path, expected",
    [
        ("model.go", True),
        ("pkg/model.go", True),
        ("model_test.go", False),
        ("model.txt", False),
        ("vendor/lib/model.go", False),
        (".cache/model.go", False),
        ("pkg/.model.go", False),
    ],
)
def test_is_source_path(path, expected) -> None:
    assert is_source_path(path) is expected


def test_iter_source_files_walks_in_lexical_order(tmp_path, write_go) -> None:
    for name in (
        "z.go",
        "a.go",
        "b_test.go",
        "notes.txt",
        "sub/c.go",
        "vendor/d.go",
        ".hidden/e.go",
    ):
        write_go(name, "package main\n")

    found = [os.path.relpath(path, tmp_path) for path in iter_source_files(tmp_path)]

    assert found == ["a.go", os.path.join("sub", "c.go"), "z.go"]


def test_iter_source_files_custom_excludes(tmp_path, write_go) -> None:
    write_go("gen/a.go", "package gen\n")
    write_go("vendor/b.go", "package vendor\n")

    found = [os.path.relpath(path, tmp_path) for path in iter_source_files(tmp_path, ("gen",))]

    assert found == [os.path.join("vendor", "b.go")]


def test_process_file_prints_by_default(write_go) -> None:
    path = write_go("model.go", "package main\n\ntype A struct{}\n")
    out = io.StringIO()

    process_file(str(path), ProcessOptions(), out)

    assert out.getvalue() == "package main\n\n// @name A\ntype A struct{}\n"
    assert path.read_text() == "package main\n\ntype A struct{}\n"


def test_process_file_in_place(write_go) -> None:
    path = write_go("model.go", "package main\n\ntype A struct{}\n")
    out = io.StringIO()

    process_file(str(path), ProcessOptions(in_place=True), out)

    assert out.getvalue() == ""
    assert path.read_text() == "package main\n\n// @name A\ntype A struct{}\n"


def test_write_file_creates_with_mode(tmp_path) -> None:
    path = tmp_path / "new.go"

    write_file(str(path), "package main\n", 0o600)

    assert path.read_text() == "package main\n"
    assert stat.S_IMODE(path.stat().st_mode) & 0o077 == 0


def test_run_reports_missing_paths_and_continues(tmp_path, write_go) -> None:
    path = write_go("model.go", "package main\n\ntype A struct{}\n")
    missing = tmp_path / "missing.go"
    out, err = io.StringIO(), io.StringIO()

    results = run([str(missing), str(path)], ProcessOptions(), out, err)

    assert err.getvalue() == f"stat {missing}: No such file or directory\n"
    assert [result.path for result in results] == [str(path)]
    assert "// @name A" in out.getvalue()


def test_run_skips_non_go_files(write_go) -> None:
    path = write_go("README.md", "# hi\n")
    out = io.StringIO()

    assert run([str(path)], ProcessOptions(), out, io.StringIO()) == []
    assert out.getvalue() == ""


def test_comment_right_after_brace_survives() -> None:
    source = "package p\n\ntype A struct{}// keep me\n"

    output = process_source(source).output

    assert output == "package p\n\n// @name A\ntype A struct{}// keep me\n"
    assert process_source(output).output == output


def test_detached_annotation_is_not_duplicated() -> None:
    source = "package p\n\n// @name A\n\ntype A struct{}\n"

    result = process_source(source)

    assert result.output == source
    assert result.annotations == []


def test_detached_stale_annotation_is_replaced() -> None:
    source = "package p\n\n// @name Old\n\ntype A struct{}\n"

    output = process_source(source).output

    assert output == "package p\n\n// @name A\ntype A struct{}\n"


def test_annotation_inside_type_group_is_not_duplicated() -> None:
    source = "package p\n\ntype (\n\t// @name A\n\tA struct{}\n)\n"

    result = process_source(source)

    assert result.output == source
    assert result.output.count("@name A") == 1


def test_crlf_line_endings_are_kept() -> None:
    source = "package p\r\n\r\ntype A struct{}\r\n"

    output = process_source(source).output

    assert output == "package p\r\n\r\n// @name A\r\ntype A struct{}\r\n"


def test_code_is_copied_verbatim_by_default() -> None:
    source = "package p\n\ntype  A struct{Name string}\n"

    output = process_source(source).output

    assert output == "package p\n\n// @name A\ntype  A struct{Name string}\n"
