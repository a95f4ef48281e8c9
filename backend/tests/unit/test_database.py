"""Tests for schema creation, additive migrations and the Store."""

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.pool import StaticPool

from funding_advisor.config import Settings
from funding_advisor.database import Store, apply_additive_migrations, create_schema
from funding_advisor.models.company import CompanyModel


def _memory_engine():
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


class TestCreateSchema:
    def test_creates_all_tables(self):
        engine = _memory_engine()
        create_schema(engine)

        tables = set(inspect(engine).get_table_names())
        assert {
            "companies",
            "company_cases",
            "recommendations",
            "history",
            "investor_reports",
            "investor_report_changes",
        } <= tables

    def test_idempotent(self):
        engine = _memory_engine()
        create_schema(engine)
        create_schema(engine)

        assert apply_additive_migrations(engine) == []


class TestAdditiveMigrations:
    def test_adds_missing_nullable_columns(self):
        engine = _memory_engine()
        with engine.begin() as conn:
            conn.execute(text("CREATE TABLE companies (id INTEGER PRIMARY KEY, name VARCHAR(255) NOT NULL)"))
            conn.execute(text("INSERT INTO companies (id, name) VALUES (1, 'Legacy Oy')"))

        added = apply_additive_migrations(engine)

        assert "companies.manual_change_log" in added
        assert "companies.funding_need_min_eur" in added
        columns = {c["name"] for c in inspect(engine).get_columns("companies")}
        assert "manual_change_log" in columns

        with engine.connect() as conn:
            row = conn.execute(text("SELECT name, city FROM companies WHERE id = 1")).one()
        assert tuple(row) == ("Legacy Oy", None)

    def test_missing_tables_are_left_to_create_all(self):
        engine = _memory_engine()
        assert apply_additive_migrations(engine) == []


class TestStore:
    def test_from_settings_in_memory(self):
        store = Store.from_settings(Settings(database_url="sqlite:///:memory:"))
        store.init_schema()

        session = store.session()
        try:
            session.add(CompanyModel(name="Acme Oy"))
            session.commit()
        finally:
            session.close()

        other = store.session()
        try:
            assert other.query(CompanyModel).count() == 1
        finally:
            other.close()
            store.dispose()

    def test_creates_sqlite_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "advisor.db"
        store = Store(f"sqlite:///{db_path}")
        store.init_schema()
        store.dispose()

        assert db_path.exists()
