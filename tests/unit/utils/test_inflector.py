"""命名转换工具的单元测试."""

import pytest

from crudkit.utils.inflector import humanize, pluralize, underscore, variable_name


@pytest.mark.unit
def test_underscore_and_humanize() -> None:
    assert underscore("BlogPost") == "blog_post"
    assert underscore("HTTPRequest") == "http_request"
    assert humanize("BlogPost") == "Blog Post"
    assert humanize("blog_post") == "Blog Post"
    assert humanize("") == ""


@pytest.mark.unit
def test_pluralize_common_rules() -> None:
    assert pluralize("article") == "articles"
    assert pluralize("category") == "categories"
    assert pluralize("day") == "days"
    assert pluralize("box") == "boxes"
    assert pluralize("branch") == "branches"
    assert pluralize("") == ""


@pytest.mark.unit
def test_variable_name() -> None:
    assert variable_name("Article") == "article"
    assert variable_name("BlogPost", plural=True) == "blog_posts"
