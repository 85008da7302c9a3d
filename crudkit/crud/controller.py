"""CRUD 控制器.

每个请求实例化一次控制器,由其持有 CrudComponent 并提供
渲染、重定向、来源页解析等被 CRUD 动作借用的能力.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from flask import Blueprint, abort, make_response, redirect, render_template, request, url_for

from crudkit.constants import HttpMethod
from crudkit.crud.actions import (
    AddCrudAction,
    DeleteCrudAction,
    EditCrudAction,
    IndexCrudAction,
    ViewCrudAction,
)
from crudkit.crud.component import ActionSpec, CrudComponent
from crudkit.utils.inflector import variable_name
from crudkit.utils.redirect_safety import local_path_from_url
from crudkit.utils.structlog_config import log_info

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue
    from werkzeug.wrappers import Response

DEFAULT_CRUD_ACTIONS: Mapping[str, ActionSpec] = {
    "index": IndexCrudAction,
    "view": ViewCrudAction,
    "add": AddCrudAction,
    "edit": EditCrudAction,
    "delete": DeleteCrudAction,
}

# 动作名 -> (URL 规则, 允许的方法)
DEFAULT_CRUD_ROUTES: Mapping[str, tuple[str, tuple[str, ...]]] = {
    "index": ("/", (HttpMethod.GET,)),
    "view": ("/view/<id>", (HttpMethod.GET,)),
    "add": ("/add", (HttpMethod.GET, HttpMethod.POST)),
    "edit": ("/edit/<id>", (HttpMethod.GET, HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)),
    "delete": ("/delete/<id>", (HttpMethod.GET, HttpMethod.POST, HttpMethod.DELETE)),
}


class CrudController:
    """基于 CrudComponent 的资源控制器.

    子类设置 ``model`` 即可获得 index/view/add/edit/delete 五个动作,
    并可在 ``setup`` 中调整组件配置.

    Attributes:
        model: SQLAlchemy 映射类.
        template_prefix: 模板目录,缺省为模型名的下划线复数形式.
        crud_actions: 动作名到动作类(或 ``{"class", "config", "enabled"}``)的映射.
        crud_routes: 动作名到 (URL 规则, 方法) 的映射.

    """

    model: ClassVar[type[Any]]
    template_prefix: ClassVar[str | None] = None
    crud_actions: ClassVar[Mapping[str, ActionSpec]] = DEFAULT_CRUD_ACTIONS
    crud_routes: ClassVar[Mapping[str, tuple[str, tuple[str, ...]]]] = DEFAULT_CRUD_ROUTES

    def __init__(self, blueprint_name: str, action: str) -> None:
        """初始化控制器.

        Args:
            blueprint_name: 注册路由的蓝图名,用于生成站内 URL.
            action: 当前请求的动作名.

        Raises:
            RuntimeError: 当子类未配置 model 时抛出.

        """
        if getattr(self, "model", None) is None:
            msg = f"{self.__class__.__name__} 未配置 model"
            raise RuntimeError(msg)
        self.blueprint_name = blueprint_name
        self.action = action
        self.request = request
        self.response: Response | None = None
        self.view_vars: dict[str, Any] = {}
        self.components: dict[str, Any] = {}
        self.crud = CrudComponent(self, actions=self.crud_actions)
        self.components["crud"] = self.crud
        self.setup()

    def setup(self) -> None:
        """子类钩子,在分派前调整 CRUD 配置."""

    @property
    def model_class(self) -> str:
        return self.model.__name__

    def resolved_template_prefix(self) -> str:
        return self.template_prefix or variable_name(self.model_class, plural=True)

    # ------------------------------------------------------------------ #
    # Response capabilities
    # ------------------------------------------------------------------ #
    def set(self, name: str, value: Any) -> None:
        """设置视图变量."""
        self.view_vars[name] = value

    def url_for_spec(self, url: str | Mapping[str, Any]) -> str:
        """把 URL 规格转换为站内 URL.

        字典规格支持 ``action``(缺省为当前动作)、``controller``(蓝图名)与其他路由参数.

        Args:
            url: 字符串原样返回,字典经 url_for 解析.

        Returns:
            str: URL.

        """
        if isinstance(url, str):
            return url
        params = dict(url)
        action = params.pop("action", self.action)
        blueprint_name = params.pop("controller", self.blueprint_name)
        return url_for(f"{blueprint_name}.{action}", **params)

    def redirect(self, url: str | Mapping[str, Any], code: int = 302) -> Response:
        """生成重定向响应并保存在 ``self.response``."""
        target = self.url_for_spec(url)
        log_info("CRUD 重定向", module="crud", action=self.action, location=target)
        self.response = redirect(target, code=code)
        return self.response

    def referer(self, default: str | Mapping[str, Any] | None = None) -> str:
        """返回站内来源页路径,缺失或站外时返回默认地址.

        Args:
            default: 默认地址,缺省为 ``/``.

        Returns:
            str: 可安全跳转的站内路径.

        """
        local = local_path_from_url(self.request.referrer, host=self.request.host)
        if local:
            return local
        if default is None:
            return "/"
        return self.url_for_spec(default)

    def render(self, view: str) -> Response:
        """渲染 ``<template_prefix>/<view>.html`` 并保存在 ``self.response``."""
        template = f"{self.resolved_template_prefix()}/{view}.html"
        self.response = make_response(render_template(template, **self.view_vars))
        return self.response

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #
    def dispatch(self, *args: Any) -> ResponseReturnValue:
        """执行当前动作,动作被禁用或全部让出时返回 404."""
        response = self.crud.execute(self.action, args)
        if response is None:
            abort(404)
        return response

    @classmethod
    def as_view(cls, action: str) -> Callable[..., ResponseReturnValue]:
        """生成某个动作的 Flask 视图函数."""

        def view(**kwargs: Any) -> ResponseReturnValue:
            blueprint_name = request.blueprint or ""
            controller = cls(blueprint_name, action)
            return controller.dispatch(*kwargs.values())

        view.__name__ = f"{cls.__name__}_{action}"
        view.__doc__ = cls.__doc__
        return view

    @classmethod
    def register(cls, blueprint: Blueprint) -> Blueprint:
        """在蓝图上为每个映射的动作注册路由,端点名即动作名.

        Args:
            blueprint: 目标蓝图.

        Returns:
            同一个蓝图,便于链式注册.

        """
        for action in cls.crud_actions:
            route = cls.crud_routes.get(action)
            if route is None:
                continue
            rule, methods = route
            blueprint.add_url_rule(rule, endpoint=action, view_func=cls.as_view(action), methods=list(methods))
        return blueprint
