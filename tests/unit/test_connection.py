from collections.abc import Generator
from unittest.mock import MagicMock, patch

import pytest

from prompt_refiner.config.settings import Settings
from prompt_refiner.database import connection
from prompt_refiner.database.connection import (
    build_conninfo,
    close_pool,
    get_connection,
    init_pool,
)


@pytest.fixture(autouse=True)
def _reset_pool() -> Generator[None, None, None]:
    connection._pool = None
    yield
    connection._pool = None


def _make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "db_host": "db.internal",
        "db_port": 6543,
        "db_database": "refiner",
        "db_username": "svc",
        "db_password": "pw",
    }
    values.update(overrides)
    return Settings(**values)


class TestBuildConninfo:
    def test_includes_connection_parameters(self) -> None:
        info = build_conninfo(_make_settings())
        assert "host=db.internal" in info
        assert "port=6543" in info
        assert "dbname=refiner" in info
        assert "user=svc" in info
        assert "application_name=prompt-refiner" in info


class TestInitPool:
    def test_uses_configured_pool_sizes(self) -> None:
        with patch("prompt_refiner.database.connection.ConnectionPool") as pool_cls:
            init_pool(_make_settings(db_pool_min_size=2, db_pool_max_size=4))

        kwargs = pool_cls.call_args.kwargs
        assert kwargs["min_size"] == 2
        assert kwargs["max_size"] == 4
        assert kwargs["open"] is True

    def test_reinit_closes_previous_pool(self) -> None:
        first, second = MagicMock(), MagicMock()
        with patch(
            "prompt_refiner.database.connection.ConnectionPool", side_effect=[first, second]
        ):
            init_pool(_make_settings())
            init_pool(_make_settings())

        first.close.assert_called_once()
        second.close.assert_not_called()


class TestGetConnection:
    def test_raises_before_init(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            with get_connection():
                pass

    def test_yields_pooled_connection(self) -> None:
        pool = MagicMock()
        conn = MagicMock()
        pool.connection.return_value.__enter__.return_value = conn
        connection._pool = pool

        with get_connection() as borrowed:
            assert borrowed is conn

    def test_close_pool_is_idempotent(self) -> None:
        pool = MagicMock()
        connection._pool = pool
        close_pool()
        close_pool()
        pool.close.assert_called_once()
