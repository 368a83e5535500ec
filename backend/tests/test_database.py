from commission_tracker.core.database import normalize_database_url


def test_postgres_scheme_rewritten_for_psycopg():
    assert normalize_database_url("postgres://u:p@host:5432/db") == "postgresql+psycopg://u:p@host:5432/db"
    assert normalize_database_url("postgresql://u:p@host/db") == "postgresql+psycopg://u:p@host/db"


def test_other_urls_untouched():
    assert normalize_database_url("postgresql+psycopg://u:p@host/db") == "postgresql+psycopg://u:p@host/db"
    assert normalize_database_url("sqlite:///./commission_tracker.db") == "sqlite:///./commission_tracker.db"
