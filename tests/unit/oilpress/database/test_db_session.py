"""Unit tests for DbSessionService."""

import pytest
from sqlalchemy import inspect
from sqlmodel import create_engine

from src.oilpress_admin.core.services import DbSessionService
from src.oilpress_admin.core.services.database.db_session import engine_options
from src.oilpress_admin.entities.content import Faq
from src.oilpress_admin.entities.core._base import DocumentRepository
from src.oilpress_admin.runtime.config.config_data import ConfigData


class TestDbSessionService:
    def test_create_all_creates_document_table(self, db_service):
        assert "documents" in inspect(db_service.engine).get_table_names()

    def test_health_check(self, db_service):
        assert db_service.health_check() is True

    def test_health_check_fails_for_unreachable_database(self):
        service = DbSessionService(engine=create_engine("sqlite:////nonexistent/dir/db.sqlite"))
        assert service.health_check() is False

    def test_session_scope_commits(self, db_service):
        with db_service.session_scope() as session:
            created = DocumentRepository(session, "faqs", Faq).create(Faq(question="Q?", answer="A"))

        with db_service.session_scope() as session:
            assert DocumentRepository(session, "faqs", Faq).get(created.id) is not None

    def test_session_scope_rolls_back_on_error(self, db_service):
        with pytest.raises(RuntimeError):
            with db_service.session_scope() as session:
                DocumentRepository(session, "faqs", Faq).create(Faq(id="gone", question="Q?", answer="A"))
                raise RuntimeError("boom")

        with db_service.session_scope() as session:
            assert DocumentRepository(session, "faqs", Faq).get("gone") is None


class TestEngineOptions:
    def test_sqlite_skips_pool_settings(self):
        options = engine_options(ConfigData())
        assert options["connect_args"]["check_same_thread"] is False
        assert "pool_size" not in options

    def test_server_database_gets_pool_settings(self):
        config = ConfigData.model_validate(
            {"database": {"url": "postgresql://u:p@db/oilpress", "pool_size": 7}}
        )
        options = engine_options(config)
        assert options["pool_size"] == 7
        assert options["pool_pre_ping"] is True
        assert "connect_args" not in options
