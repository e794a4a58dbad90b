from dependency_injector import containers, providers

from currencyapi.config import Settings
from currencyapi.database.connection import create_db_engine, create_session_factory
from currencyapi.services.auth_service import AuthService
from currencyapi.services.currency_service import CurrencyService
from currencyapi.services.reward_service import RewardService
from currencyapi.services.transaction_logger import TransactionLogger


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class RepositoryModule(containers.DeclarativeContainer):
    """Database engine and session factory (one pool per process)."""

    config = providers.DependenciesContainer()

    engine = providers.Singleton(create_db_engine, settings=config.config)
    session_factory = providers.Singleton(create_session_factory, engine=engine)


class ServiceModule(containers.DeclarativeContainer):
    """Service layer dependencies."""

    config = providers.DependenciesContainer()
    repositories = providers.DependenciesContainer()

    transaction_logger = providers.Factory(
        TransactionLogger,
        session_factory=repositories.session_factory,
        settings=config.config,
    )
    auth_service = providers.Factory(
        AuthService,
        session_factory=repositories.session_factory,
        settings=config.config,
    )
    currency_service = providers.Factory(
        CurrencyService,
        session_factory=repositories.session_factory,
        settings=config.config,
        transaction_logger=transaction_logger,
    )
    reward_service = providers.Factory(
        RewardService,
        session_factory=repositories.session_factory,
        settings=config.config,
        transaction_logger=transaction_logger,
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "currencyapi.core.auth_middleware",
            "currencyapi.routers.auth_router",
            "currencyapi.routers.currency_router",
            "currencyapi.routers.reward_router",
            "currencyapi.routers.health_router",
        ],
    )

    config = providers.Container(ConfigModule)
    repositories = providers.Container(RepositoryModule, config=config)
    services = providers.Container(
        ServiceModule, config=config, repositories=repositories
    )
