"""Tests for the AsciiDoc generators."""

import pytest

from code2asciidoc.errors import ConfigError
from code2asciidoc.generators import (
    document_title,
    generate_block,
    generate_document,
    include_path,
)
from code2asciidoc.models import DocBlock, PathMode, RenderConfig


def _listing(**kwargs):
    defaults = dict(
        function_name="ListUsers",
        source_dir="/src/users",
        source_filename="users_test.go",
        title="Listing users",
        body=["Users are listed page by page."],
    )
    defaults.update(kwargs)
    return DocBlock(**defaults)


def _api(**kwargs):
    defaults = dict(
        function_name="CreateUser",
        source_dir="/src/users",
        source_filename="users_test.go",
        title="Creating a user",
        body=["Users are created with a POST request."],
        is_api_doc=True,
    )
    defaults.update(kwargs)
    return DocBlock(**defaults)


def test_generate_block_default():
    expected = (
        "// tag::ListUsers[]\n"
        "<<<\n"
        "== Listing users\n"
        "Users are listed page by page.\n"
        "\n"
        "[#listing users_listusers_go]\n"
        ".Go Listing users\n"
        "[source,go]\n"
        "----\n"
        "include::/src/users/users_test.go[tag=ListUsers,indent=0]\n"
        "----\n"
        "// end::ListUsers[]\n"
    )
    assert generate_block(_listing(), RenderConfig()) == expected


def test_api_block_includes_json_after_go():
    out = generate_block(_api(), RenderConfig())
    go = out.index("include::/src/users/users_test.go[tag=CreateUser,indent=0]")
    json = out.index("include::/src/users/users.apisamples[tag=CreateUser]")
    assert go < json
    assert "[#creating a user_createuser_json]\n.JSON Creating a user\n[source,json]\n" in out


def test_skip_sample_data():
    out = generate_block(_api(), RenderConfig(skip_sample_data=True))
    assert "[source,json]" not in out
    assert "[source,go]" in out


def test_non_api_block_never_has_json():
    for skip in (False, True):
        out = generate_block(_listing(), RenderConfig(skip_sample_data=skip))
        assert "[source,json]" not in out
        assert ".apisamples" not in out


def test_post_section():
    block = _listing(post_title="Notes", post=["Pages hold 50 users."])
    out = generate_block(block, RenderConfig())
    assert out.endswith(
        "----\n"
        "\n"
        "=== Notes\n"
        "Pages hold 50 users.\n"
        "\n"
        "// end::ListUsers[]\n"
    )


def test_post_title_without_body():
    out = generate_block(_listing(post_title="Notes"), RenderConfig())
    assert "\n=== Notes\n\n// end::ListUsers[]\n" in out


def test_all_wrappers_disabled():
    config = RenderConfig(no_outer_tags=True, no_page_breaks=True, no_headings=True)
    out = generate_block(_listing(), config)
    assert out.startswith("Users are listed page by page.\n\n[#listing users_listusers_go]")
    assert "// tag::" not in out
    assert "// end::" not in out
    assert "<<<" not in out
    assert "== " not in out
    assert out.endswith("----\n")


def test_generate_block_is_deterministic():
    block = _api(post_title="Notes", post=["n"])
    config = RenderConfig(path_mode=PathMode.LITERAL_PREFIX, path_value="p/")
    assert generate_block(block, config) == generate_block(block, config)


class TestIncludePath:
    """One path mode is active per config."""

    def test_absolute(self):
        path = include_path(_api(), "users_test.go", RenderConfig())
        assert path == "/src/users/users_test.go"

    def test_absolute_without_directory(self):
        block = _api(source_dir="")
        assert include_path(block, "users_test.go", RenderConfig()) == "users_test.go"

    def test_antora(self):
        config = RenderConfig.from_options(antora=True)
        assert include_path(_api(), "users_test.go", config) == "example$users_test.go"

    def test_literal_prefix(self):
        config = RenderConfig.from_options(include_prefix="example$")
        out = generate_block(_api(), config)
        assert "include::example$users_test.go[tag=CreateUser,indent=0]" in out
        assert "include::example$users.apisamples[tag=CreateUser]" in out
        assert "/src/users" not in out

    def test_relative_to(self):
        config = RenderConfig.from_options(relative_to="/src")
        assert include_path(_api(), "users_test.go", config) == "users/users_test.go"

    def test_relative_to_outside_tree_falls_back(self):
        config = RenderConfig.from_options(relative_to="/elsewhere")
        assert include_path(_api(), "users_test.go", config) == "/src/users/users_test.go"

    def test_conflicting_modes_rejected(self):
        with pytest.raises(ConfigError):
            RenderConfig.from_options(antora=True, include_prefix="example$")
        with pytest.raises(ConfigError):
            RenderConfig.from_options(include_prefix="p", relative_to="/src")


def test_document_title():
    assert document_title("/src/users/users_test.go") == "users "
    assert document_title("api_keys_test.go") == "api keys "


def test_generate_document_with_header():
    blocks = [_api(), _listing()]
    out = generate_document(blocks, RenderConfig(), "users ")
    assert out.startswith(
        "= users \n:toc: left\n\n// THIS FILE IS GENERATED. DO NOT EDIT.\n"
        "// tag::CreateUser[]\n"
    )
    assert out.index("== Creating a user") < out.index("== Listing users")


def test_generate_document_without_header():
    config = RenderConfig(no_header=True)
    out = generate_document([_listing()], config, "users ")
    assert out == generate_block(_listing(), config)


def test_generate_document_empty():
    assert generate_document([], RenderConfig(no_header=True), "x") == ""
