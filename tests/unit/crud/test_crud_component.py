"""CrudComponent 动作映射与事件分派的单元测试."""

import pytest

from crudkit.constants import CrudEvents
from crudkit.core.exceptions import ActionNotMappedError, ListenerNotFoundError
from crudkit.crud.listeners import TranslationsListener


@pytest.mark.unit
def test_execute_dispatches_to_mapped_action(make_crud) -> None:
    crud = make_crud(action="delete")

    assert crud.execute(args=["9"]) == "handled:delete"
    assert crud.action("delete").calls == [("9",)]
    assert crud.action("edit").calls == []


@pytest.mark.unit
def test_execute_raises_when_action_not_mapped(make_crud) -> None:
    crud = make_crud(action="publish")

    with pytest.raises(ActionNotMappedError) as exc_info:
        crud.execute()

    assert exc_info.value.extra["action"] == "publish"


@pytest.mark.unit
def test_execute_returns_none_when_action_disabled(make_crud) -> None:
    crud = make_crud(action="edit")
    crud.disable("edit")

    assert crud.execute() is None
    assert crud.action("edit").calls == []


@pytest.mark.unit
def test_execute_triggers_lifecycle_events_in_order(make_crud) -> None:
    crud = make_crud(action="edit")
    seen = []
    crud.on(["initialize", "before_handle"], lambda event: seen.append(event.name))

    crud.execute(args=["1"])

    assert seen == [CrudEvents.INITIALIZE, CrudEvents.BEFORE_HANDLE]


@pytest.mark.unit
def test_before_handle_listener_can_rewrite_arguments(make_crud) -> None:
    crud = make_crud(action="edit")

    def _rewrite(event):
        event.subject.args = ["rewritten"]

    crud.on("before_handle", _rewrite)
    crud.execute(args=["1"])

    assert crud.action("edit").calls == [("rewritten",)]


@pytest.mark.unit
def test_action_spec_mapping_applies_config_and_enabled(make_crud) -> None:
    from crudkit.crud.actions import EditCrudAction, IndexCrudAction

    crud = make_crud(
        actions={
            "edit": {"class": EditCrudAction, "config": {"view": "form", "save_options": {"fields": ["title"]}}},
            "index": {"class": IndexCrudAction, "enabled": False},
        }
    )

    assert crud.view("edit") == "form"
    assert crud.action("edit").save_options() == {"fields": ["title"]}
    assert crud.find_method("edit") == "first"
    assert crud.is_action_mapped("index") is False
    assert crud.mapped_actions() == ["edit", "index"]


@pytest.mark.unit
def test_action_raises_when_not_mapped(make_crud) -> None:
    with pytest.raises(ActionNotMappedError):
        make_crud().action("publish")


@pytest.mark.unit
def test_map_action_replaces_previous_instance(make_crud) -> None:
    crud = make_crud()
    first = crud.action("edit")
    crud.map_action("edit", type(first), {"view": "form"})

    second = crud.action("edit")

    assert second is not first
    assert second.view() == "form"


@pytest.mark.unit
def test_get_listener_is_lazy_and_cached(make_crud) -> None:
    crud = make_crud()

    listener = crud.get_listener("translations")

    assert isinstance(listener, TranslationsListener)
    assert crud.get_listener("translations") is listener
    assert listener.set_flash in crud.events.listeners(CrudEvents.SET_FLASH)


@pytest.mark.unit
def test_get_listener_raises_when_missing(make_crud) -> None:
    crud = make_crud()

    assert crud.has_listener("api") is False
    with pytest.raises(ListenerNotFoundError):
        crud.get_listener("api")


@pytest.mark.unit
def test_add_listener_with_config(make_crud) -> None:
    crud = make_crud(listeners={})
    crud.add_listener("translations", TranslationsListener, {"name": "Post", "key": "admin"})

    listener = crud.get_listener("translations")

    assert listener.config("name") == "Post"
    assert listener.config("key") == "admin"


@pytest.mark.unit
def test_trigger_reports_stopped_events(make_crud) -> None:
    crud = make_crud()
    crud.on("before_delete", lambda event: False)

    subject = crud.trigger("before_delete", {"id": 3})

    assert subject.stopped is True
    assert subject.id == 3


@pytest.mark.unit
def test_create_subject_carries_shared_fields(make_crud, models) -> None:
    crud = make_crud(action="edit")

    subject = crud.create_subject({"extra": 1})

    assert subject.crud is crud
    assert subject.controller is crud._controller
    assert subject.collection is crud._controller.components
    assert subject.model is models.Article
    assert subject.model_class == "Article"
    assert subject.action == "edit"
    assert subject.args == []
    assert subject.extra == 1
