"""CRUD 动作、组件与控制器."""

from crudkit.crud.action import CrudAction
from crudkit.crud.component import CrudComponent
from crudkit.crud.controller import CrudController
from crudkit.crud.events import CrudEvent, CrudEventManager
from crudkit.crud.subject import CrudSubject

__all__ = [
    "CrudAction",
    "CrudComponent",
    "CrudController",
    "CrudEvent",
    "CrudEventManager",
    "CrudSubject",
]
