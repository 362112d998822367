"""Unit tests for engine construction."""

from unittest.mock import patch

from shelf.config import DatabaseSettings, Settings
from shelf.persistence.database import create_engine


class TestCreateEngine:
    """Tests for create_engine."""

    def test_connections_time_out_and_are_named(self):
        """Statements are bounded and connections identify the environment."""
        # Arrange
        settings = Settings(database=DatabaseSettings(command_timeout=12.5))

        # Act
        with patch("shelf.persistence.database.create_async_engine") as factory:
            create_engine(settings)

        # Assert
        connect_args = factory.call_args.kwargs["connect_args"]
        assert connect_args["command_timeout"] == 12.5
        assert connect_args["server_settings"]["application_name"] == (
            f"shelf-{settings.environment}"
        )
