import json

from protean.domain import Domain
from sqlalchemy import create_engine


def _load_models(domain: Domain, provider_name: str):
    """Register live aggregates and entities with the provider's SQLAlchemy metadata.

    Accessing the repository's ``_dao`` forces the model to be built.
    """
    for _, aggregate_record in domain.registry.aggregates.items():
        if aggregate_record.cls.meta_.provider == provider_name:
            domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

    for _, entity_record in domain.registry.entities.items():
        if entity_record.cls.meta_.provider == provider_name:
            domain.repository_for(entity_record.cls)._dao  # noqa: B018


def setup_db(domain: Domain):
    """Create tables for every relational provider."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                _load_models(domain, provider.name)
                provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop tables for every relational provider."""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if provider.conn_info["provider"] in ("sqlite", "postgresql"):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)


def seed_products(domain: Domain, products: list[dict]) -> list[str]:
    """Register catalog products in the inventory ledger."""
    from ordering.inventory.registration import RegisterProduct

    ids = []
    with domain.domain_context():
        for data in products:
            command = RegisterProduct(
                product_id=data.get("id"),
                name=data["name"],
                price=data["price"],
                stock=data.get("stock", 0),
                image=data.get("image"),
                sizes=json.dumps(data.get("sizes", [])),
                colors=json.dumps(data.get("colors", [])),
            )
            ids.append(domain.process(command, asynchronous=False))
    return ids
