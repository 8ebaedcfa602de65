import logging
import ssl
from pathlib import Path

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_database_url(settings: Settings) -> URL:
    """Resolve the database URL, preferring an explicit DATABASE_URL."""
    if settings.database_url:
        return make_url(settings.database_url)

    return URL.create(
        drivername="postgresql+asyncpg",
        username=settings.database_user,
        password=settings.database_password,
        host=settings.database_host,
        port=settings.database_port,
        database=settings.database_name,
    )


def load_ca_certificate(settings: Settings) -> str:
    """
    Load the PEM root certificate used to verify the database server.

    Production reads it from the CA_CERT value, every other environment
    reads it from the file at CA_CERT_PATH.
    """
    if settings.is_production:
        if not settings.ca_cert:
            raise RuntimeError("Missing CA_CERT env variable")
        return settings.ca_cert

    return Path(settings.ca_cert_path).read_text(encoding="utf-8")


def build_ssl_context(settings: Settings) -> ssl.SSLContext:
    """TLS context that requires a certificate signed by the configured CA."""
    context = ssl.create_default_context(cadata=load_ca_certificate(settings))
    context.verify_mode = ssl.CERT_REQUIRED
    return context


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    url = build_database_url(settings)

    if url.get_backend_name() != "postgresql":
        # Local SQLite and friends: no pool tuning, no TLS
        return create_async_engine(url, echo=settings.debug)

    return create_async_engine(
        url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Check connection health before using
        pool_size=5,
        max_overflow=10,
        pool_timeout=10,      # Fail fast if can't get connection
        pool_recycle=300,     # Recycle connections every 5 min to avoid stale connections
        connect_args={
            "ssl": build_ssl_context(settings),
            "command_timeout": 30,  # Query timeout
        },
    )


engine = create_engine_from_settings(settings)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create any missing tables from the ORM metadata."""
    # Register models on Base.metadata before creating tables
    import app.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema synchronized")


async def get_db():
    """
    Dependency that provides a database session.

    The session is committed when the request finishes and rolled back
    if anything raised, so each request is one transaction.

    Usage in FastAPI:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
