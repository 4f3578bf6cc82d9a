"""PostgreSQL connection pool using psycopg2."""

from psycopg2.pool import SimpleConnectionPool

from app.config import settings

_pool: SimpleConnectionPool | None = None


def get_pool() -> SimpleConnectionPool:
    """Return the shared connection pool, creating it on first call.

    Returns
    -------
    SimpleConnectionPool
        A psycopg2 connection pool sized by ``PG_POOL_MIN`` / ``PG_POOL_MAX``.
    """
    global _pool
    if _pool is None:
        _pool = SimpleConnectionPool(
            minconn=settings.pg_pool_min,
            maxconn=settings.pg_pool_max,
            host=settings.pg_host,
            port=settings.pg_port,
            dbname=settings.pg_database,
            user=settings.pg_user,
            password=settings.pg_password,
        )
    return _pool


def get_connection():
    """Borrow a connection from the pool.

    Returns
    -------
    psycopg2.extensions.connection
        A connection the caller must hand back with ``put_connection``.
    """
    return get_pool().getconn()


def put_connection(conn) -> None:
    """Hand a borrowed connection back to the pool.

    Parameters
    ----------
    conn : psycopg2.extensions.connection
        A connection obtained from ``get_connection``.
    """
    get_pool().putconn(conn)


def close_pool() -> None:
    """Close every pooled connection.

    Called on application shutdown and at the end of ``scripts/init_db.py``;
    the next ``get_pool`` call builds a fresh pool.
    """
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
