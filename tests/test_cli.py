"""
Unit tests for the coinspot command-line wrapper.
"""

import json
from unittest.mock import patch

import pytest

from coinspot import CoinspotClient, NonOkResponse, RequestError
from coinspot.cli import EXIT_ERROR, EXIT_NO_RESULTS, EXIT_OK, build_parser, main


@pytest.fixture
def env_credentials(monkeypatch):
    """Provide credentials via the environment."""
    monkeypatch.setenv("COINSPOT_API_KEY", "k")
    monkeypatch.setenv("COINSPOT_API_SECRET", "s")
    monkeypatch.delenv("COINSPOT_API_URL", raising=False)
    # Keep a stray .env in the working directory out of the test
    with patch("coinspot.cli.load_dotenv"):
        yield monkeypatch


class TestParser:
    """Tests for argument parsing."""

    def test_buy_arguments(self):
        """buy should take cointype, amount and rate."""
        args = build_parser().parse_args(["buy", "BTC", "0.5", "60000"])

        assert args.command == "buy"
        assert args.cointype == "BTC"
        assert args.amount == "0.5"
        assert args.rate == "60000"

    def test_command_required(self):
        """Running without a command should exit with a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Tests for the CLI entry point."""

    @patch("coinspot.cli.CoinspotClient.my_balances")
    def test_balances_prints_json(self, mock_balances, env_credentials, capsys):
        """Should print the JSON result and exit 0."""
        mock_balances.return_value = {"status": "ok", "balances": {}}

        code = main(["balances"])

        assert code == EXIT_OK
        assert json.loads(capsys.readouterr().out) == {"status": "ok", "balances": {}}

    @patch("coinspot.cli.CoinspotClient.place_buy_order")
    def test_buy_dispatch(self, mock_buy, env_credentials):
        """buy should call place_buy_order with the given values."""
        mock_buy.return_value = {"status": "ok"}

        assert main(["buy", "BTC", "0.5", "60000"]) == EXIT_OK
        mock_buy.assert_called_once_with("BTC", "0.5", "60000")

    @patch("coinspot.cli.CoinspotClient.cancel_sell_order")
    def test_cancel_sell_dispatch(self, mock_cancel, env_credentials):
        """cancel-sell should pass the order id through."""
        mock_cancel.return_value = {"status": "ok"}

        assert main(["cancel-sell", "abc"]) == EXIT_OK
        mock_cancel.assert_called_once_with("abc")

    @patch("coinspot.cli.CoinspotClient.my_open_orders")
    def test_non_ok_exit_code(self, mock_orders, env_credentials, capsys):
        """A NonOkResponse should exit 2."""
        mock_orders.return_value = NonOkResponse(
            path="my/orders", status_code=200, reason="Not Found",
        )

        assert main(["open-orders"]) == EXIT_NO_RESULTS
        assert "No results" in capsys.readouterr().err

    @patch("coinspot.cli.CoinspotClient.my_balances")
    def test_request_error_exit_code(self, mock_balances, env_credentials, capsys):
        """A RequestError should exit 1."""
        mock_balances.side_effect = RequestError("HTTP 401 Unauthorized", status_code=401)

        assert main(["balances"]) == EXIT_ERROR
        assert "401" in capsys.readouterr().err

    def test_missing_credentials(self, monkeypatch, capsys):
        """Missing credentials should exit 1."""
        monkeypatch.delenv("COINSPOT_API_KEY", raising=False)
        monkeypatch.delenv("COINSPOT_API_SECRET", raising=False)

        with patch("coinspot.cli.load_dotenv"):
            assert main(["balances"]) == EXIT_ERROR

        assert "ERROR" in capsys.readouterr().err

    def test_missing_config_file(self, env_credentials, tmp_path):
        """A missing --config file should exit 1."""
        assert main(["--config", str(tmp_path / "nope.yaml"), "balances"]) == EXIT_ERROR

    @pytest.mark.parametrize("argv,method,expected_args", [
        (["balances"], "my_balances", ()),
        (["open-orders"], "my_open_orders", ()),
        (["orders", "BTC"], "list_open_orders", ("BTC",)),
        (["history", "LTC"], "order_history", ("LTC",)),
        (["deposit", "DOGE"], "deposit_address", ("DOGE",)),
        (["quick-buy", "BTC", "0.1"], "quick_buy", ("BTC", "0.1")),
        (["quick-sell", "ETH", "2"], "quick_sell", ("ETH", "2")),
        (["buy", "BTC", "0.5", "60000"], "place_buy_order", ("BTC", "0.5", "60000")),
        (["sell", "ETH", "1.5", "3500.25"], "place_sell_order", ("ETH", "1.5", "3500.25")),
        (["cancel-buy", "b-123"], "cancel_buy_order", ("b-123",)),
        (["cancel-sell", "s-456"], "cancel_sell_order", ("s-456",)),
    ])
    def test_every_command_dispatches(self, argv, method, expected_args, env_credentials):
        """Each sub-command should call its client method with the given values."""
        with patch.object(CoinspotClient, method, return_value={"status": "ok"}) as mock_method:
            assert main(argv) == EXIT_OK

        mock_method.assert_called_once_with(*expected_args)

    def test_malformed_config_file(self, env_credentials, tmp_path, capsys):
        """A config file that is not valid YAML should exit 1."""
        path = tmp_path / "broken.yaml"
        path.write_text("coinspot: [unclosed\n")

        assert main(["--config", str(path), "balances"]) == EXIT_ERROR
        assert "ERROR" in capsys.readouterr().err
