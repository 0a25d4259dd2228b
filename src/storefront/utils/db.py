from protean.domain import Domain
from sqlalchemy import create_engine

_SQL_PROVIDERS = ("sqlite", "postgresql")


def _touch_daos(domain: Domain, provider_name: str) -> None:
    """Force DAO construction so every table is registered on the provider metadata."""
    for records in (domain.registry.aggregates, domain.registry.entities):
        for _, record in records.items():
            if record.cls.meta_.provider == provider_name:
                domain.repository_for(record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every SQL-backed provider"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                _touch_daos(domain, provider.name)
                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop tables for every SQL-backed provider"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in _SQL_PROVIDERS:
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
