# tests/unit/crud/conftest.py
"""CRUD 测试专用 fixtures.

提供测试模型、控制器、内存 SQLite 应用,以及不依赖 HTTP 的伪控制器/伪请求。
"""

import uuid
from pathlib import Path
from types import SimpleNamespace

import pytest
from flask import Blueprint
from werkzeug.datastructures import MultiDict

from crudkit import create_app, db
from crudkit.crud import CrudAction, CrudComponent, CrudController
from crudkit.settings import Settings

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


class Article(db.Model):
    """整数主键."""

    __tablename__ = "articles"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    body = db.Column(db.Text, nullable=True)
    published = db.Column(db.Boolean, nullable=False, default=False)

    @classmethod
    def find_published(cls, statement):
        return statement.where(cls.published.is_(True))


class Document(db.Model):
    """36 位字符串主键,按 UUID 校验."""

    __tablename__ = "documents"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = db.Column(db.String(200), nullable=False)


class Tag(db.Model):
    """原生 UUID 主键."""

    __tablename__ = "tags"

    id = db.Column(db.Uuid, primary_key=True, default=uuid.uuid4)
    name = db.Column(db.String(50), nullable=False)


class Preference(db.Model):
    """短字符串主键,无法可靠推断校验类型."""

    __tablename__ = "preferences"

    key = db.Column(db.String(50), primary_key=True)
    value = db.Column(db.String(200), nullable=True)


class ArticleController(CrudController):
    model = Article


class DocumentController(CrudController):
    model = Document


class RecordingAction(CrudAction):
    """记录 ``_handle`` 调用参数的动作."""

    def __init__(self, subject):
        super().__init__(subject)
        self.calls = []

    def _handle(self, *args):
        self.calls.append(args)
        return f"handled:{self.config('handle_action')}"


class ValidatingAction(CrudAction):
    """只做 ID 校验的动作."""

    def _handle(self, id_=None, *args):
        valid = self.validate_id(id_)
        if valid is not True:
            return valid
        return "valid"


class FakeRequest:
    """最小化的请求替身."""

    def __init__(self, *, method="GET", view_args=None, form=None, args=None, referrer=None, host="localhost"):
        self.method = method
        self.view_args = dict(view_args or {})
        self.form = MultiDict(form or {})
        self.args = MultiDict(args or {})
        self.referrer = referrer
        self.host = host
        self.is_json = False


class FakeController:
    """记录重定向与渲染的控制器替身."""

    def __init__(self, model, action, request):
        self.model = model
        self.action = action
        self.request = request
        self.response = None
        self.components = {}
        self.view_vars = {}
        self.redirects = []
        self.rendered = []

    @property
    def model_class(self):
        return self.model.__name__ if self.model is not None else None

    def set(self, name, value):
        self.view_vars[name] = value

    def redirect(self, url, code=302):
        self.redirects.append(url)
        self.response = {"redirect": url, "code": code}
        return self.response

    def referer(self, default=None):
        if self.request.referrer:
            return self.request.referrer
        return "/" if default is None else default

    def render(self, view):
        self.rendered.append(view)
        self.response = {"render": view}
        return self.response


class RecordingSession:
    """记录 flash 调用的会话替身."""

    def __init__(self):
        self.messages = []

    def set_flash(self, message, element=None, params=None, key=None):
        self.messages.append({"message": message, "element": element, "params": params, "key": key})


@pytest.fixture
def models():
    """测试模型集合."""
    return SimpleNamespace(Article=Article, Document=Document, Tag=Tag, Preference=Preference)


@pytest.fixture
def make_request():
    """构造伪请求."""
    return FakeRequest


@pytest.fixture
def make_crud():
    """构造挂在伪控制器上的 CrudComponent.

    默认映射 edit/delete 到 RecordingAction、view 到 ValidatingAction,
    flash 写入 ``crud.session.messages``。
    """

    def _make(*, model=Article, action="edit", request=None, actions=None, listeners=None):
        controller = FakeController(model, action, request or FakeRequest())
        if actions is None:
            actions = {"edit": RecordingAction, "delete": RecordingAction, "view": ValidatingAction}
        crud = CrudComponent(controller, actions=actions, listeners=listeners)
        crud.session = RecordingSession()
        controller.components["crud"] = crud
        controller.crud = crud
        return crud

    return _make


@pytest.fixture
def app():
    """挂载 articles/documents 两个 CRUD 蓝图的内存 SQLite 应用."""
    app = create_app(settings=Settings.load(), template_folder=TEMPLATE_DIR)
    app.config["TESTING"] = True
    app.register_blueprint(ArticleController.register(Blueprint("articles", __name__)), url_prefix="/articles")
    app.register_blueprint(DocumentController.register(Blueprint("documents", __name__)), url_prefix="/documents")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def mount_articles(app):
    """挂载一个带自定义 ``setup`` 的文章控制器蓝图.

    必须在第一次请求之前调用。
    """

    def _mount(name, prefix, setup):
        controller = type(f"{name.title().replace('_', '')}Controller", (ArticleController,), {"setup": setup})
        app.register_blueprint(controller.register(Blueprint(name, __name__)), url_prefix=prefix)
        return controller

    return _mount


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def flashes(client):
    """读取会话中待展示的 flash 消息,返回 ``[(category, message), ...]``."""

    def _read():
        with client.session_transaction() as session:
            return list(session.get("_flashes", []))

    return _read


@pytest.fixture
def seed_articles(app):
    """写入若干文章并返回实例列表."""

    def _seed(count=3, *, published=False):
        articles = [Article(title=f"Article {index}", body=f"Body {index}", published=published) for index in range(1, count + 1)]
        db.session.add_all(articles)
        db.session.commit()
        return articles

    return _seed
