"""CRUD 事件监听器."""

from crudkit.crud.listeners.base import CrudListener
from crudkit.crud.listeners.translations import TranslationsListener

__all__ = ["CrudListener", "TranslationsListener"]
