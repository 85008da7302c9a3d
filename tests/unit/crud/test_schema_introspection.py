"""SQLAlchemy 模型结构探测的单元测试."""

import uuid

import pytest
from sqlalchemy import Column, LargeBinary
from sqlalchemy.orm import DeclarativeBase

from crudkit import db
from crudkit.utils.schema_introspection import (
    column_names,
    coerce_primary_key,
    primary_key_column,
    primary_key_field_info,
    primary_key_value,
)


@pytest.mark.unit
def test_primary_key_field_info(models) -> None:
    assert primary_key_field_info(models.Article) == {"type": "integer", "length": None}
    assert primary_key_field_info(models.Document) == {"type": "string", "length": 36}
    assert primary_key_field_info(models.Tag) == {"type": "uuid", "length": 36}
    assert primary_key_field_info(models.Preference) == {"type": "string", "length": 50}


@pytest.mark.unit
def test_primary_key_column_returns_none_for_plain_class() -> None:
    class _NotMapped:
        pass

    assert primary_key_column(_NotMapped) is None
    assert primary_key_field_info(_NotMapped) is None


@pytest.mark.unit
def test_column_names(models) -> None:
    assert column_names(models.Article) == ["id", "title", "body", "published"]
    assert column_names(models.Article, include_primary_key=False) == ["title", "body", "published"]


@pytest.mark.unit
def test_coerce_primary_key(models) -> None:
    tag_id = "550e8400-e29b-41d4-a716-446655440000"

    assert coerce_primary_key(models.Article, "42") == 42
    assert coerce_primary_key(models.Article, " 7 ") == 7
    assert coerce_primary_key(models.Article, "1e3") == 1000
    assert coerce_primary_key(models.Article, "2.0") == 2
    assert coerce_primary_key(models.Article, "1.5") is None
    assert coerce_primary_key(models.Article, "abc") is None
    assert coerce_primary_key(models.Tag, "not-a-uuid") is None
    assert coerce_primary_key(models.Tag, tag_id) == uuid.UUID(tag_id)
    assert coerce_primary_key(models.Document, tag_id) == tag_id
    assert coerce_primary_key(models.Article, 7) == 7


@pytest.mark.unit
def test_primary_key_value(app, models) -> None:
    article = models.Article(title="Hello")
    assert primary_key_value(article) is None

    db.session.add(article)
    db.session.commit()

    assert primary_key_value(article) == article.id


@pytest.mark.unit
def test_primary_key_field_info_reports_binary_columns() -> None:
    class _Base(DeclarativeBase):
        pass

    class _Blob(_Base):
        __tablename__ = "blobs"

        id = Column(LargeBinary(16), primary_key=True)

    assert primary_key_field_info(_Blob) == {"type": "binary", "length": 16}
