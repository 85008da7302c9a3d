"""验证常量集合的不可变性."""

from crudkit.constants import CrudEvents, FlashCategory, HttpMethod


def test_http_method_collections_are_tuples() -> None:
    """确保 HTTP 方法集合不可变."""
    assert isinstance(HttpMethod.ALL, tuple)
    assert isinstance(HttpMethod.OVERRIDABLE, tuple)
    assert isinstance(HttpMethod.WRITE_METHODS, tuple)
    assert HttpMethod.GET in HttpMethod.ALL


def test_http_method_is_write() -> None:
    assert HttpMethod.is_write("post") is True
    assert HttpMethod.is_write("PATCH") is True
    assert HttpMethod.is_write("DELETE") is False
    assert HttpMethod.is_write("GET") is False


def test_crud_events_are_qualified_and_listed() -> None:
    """确保事件名统一带 crud. 前缀."""
    assert isinstance(CrudEvents.ALL, tuple)
    assert all(name.startswith("crud.") for name in CrudEvents.ALL)
    assert CrudEvents.qualify("handle") == CrudEvents.HANDLE
    assert CrudEvents.qualify("crud.handle") == CrudEvents.HANDLE


def test_flash_category_normalizes_aliases() -> None:
    assert isinstance(FlashCategory.ALL, tuple)
    assert FlashCategory.normalize("danger") == FlashCategory.ERROR
    assert FlashCategory.normalize(" OK ") == FlashCategory.SUCCESS
    assert FlashCategory.normalize(None) == FlashCategory.INFO
