"""内置 CRUD 动作."""

from crudkit.crud.actions.add import AddCrudAction
from crudkit.crud.actions.delete import DeleteCrudAction
from crudkit.crud.actions.edit import EditCrudAction
from crudkit.crud.actions.form import FormCrudAction
from crudkit.crud.actions.index import IndexCrudAction
from crudkit.crud.actions.view import ViewCrudAction

__all__ = [
    "AddCrudAction",
    "DeleteCrudAction",
    "EditCrudAction",
    "FormCrudAction",
    "IndexCrudAction",
    "ViewCrudAction",
]
