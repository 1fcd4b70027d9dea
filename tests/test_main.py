"""
CLI tests
"""
import json

import pytest
from decimal import Decimal
from unittest.mock import patch

from typer.testing import CliRunner

from celo_wallet_stats import main
from celo_wallet_stats.exceptions import CeloscanAPIError, InvalidAddressError
from celo_wallet_stats.models import Result, WalletScore, WalletStats

from conftest import WALLET

runner = CliRunner()


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("CELOSCAN_API_KEY", "test-key")
    monkeypatch.setenv("OUTPUT_FORMAT", "table")


@pytest.fixture
def service():
    with patch.object(main, "CeloscanService") as service_cls:
        yield service_cls.return_value


def wallet_result(stats):
    return Result.success(WalletScore(address=WALLET, stats=stats), "ok")


class TestStatsCommand:

    def test_table_output(self, service):
        service.get_wallet_stats.return_value = wallet_result(WalletStats(
            balance=Decimal("2.5"), total_transactions=12, tokens_holding=3))

        result = runner.invoke(main.app, ["stats", WALLET])

        assert result.exit_code == 0
        assert "Wallet Stats" in result.output
        assert "Total transactions" in result.output
        service.get_wallet_stats.assert_called_once_with(WALLET)

    def test_no_data_output(self, service):
        service.get_wallet_stats.return_value = wallet_result(
            WalletStats(no_data=True))

        result = runner.invoke(main.app, ["stats", WALLET])

        assert result.exit_code == 0
        assert "Not enough transaction history" in result.output

    def test_json_export(self, service, tmp_path):
        service.get_wallet_stats.return_value = wallet_result(WalletStats(
            balance=Decimal("2.5"), total_transactions=12, nft_holding=4))
        output = tmp_path / "stats.json"

        result = runner.invoke(
            main.app, ["stats", WALLET, "--format", "json", "--output", str(output)])

        assert result.exit_code == 0
        data = json.loads(output.read_text())
        assert data["address"] == WALLET
        assert data["stats"]["balance"] == "2.5"
        assert data["stats"]["total_transactions"] == 12
        assert data["stats"]["nft_holding"] == 4

    def test_table_cannot_be_written_to_file(self, service, tmp_path):
        output = tmp_path / "stats.txt"

        result = runner.invoke(
            main.app, ["stats", WALLET, "--format", "table", "--output", str(output)])

        assert result.exit_code == 2
        assert not output.exists()
        service.get_wallet_stats.assert_not_called()

    def test_invalid_address_exits(self, service):
        service.get_wallet_stats.side_effect = InvalidAddressError(
            "Invalid address")

        result = runner.invoke(main.app, ["stats", "0x123"])

        assert result.exit_code == 1
        assert "Invalid address" in result.output

    def test_api_error_exits(self, service):
        service.get_wallet_stats.side_effect = CeloscanAPIError(
            "Celoscan API error: NOTOK")

        result = runner.invoke(main.app, ["stats", WALLET])

        assert result.exit_code == 1

    def test_missing_api_key(self, monkeypatch, service):
        monkeypatch.delenv("CELOSCAN_API_KEY")

        result = runner.invoke(main.app, ["stats", WALLET])

        assert result.exit_code == 1
        assert "CELOSCAN_API_KEY" in result.output
        service.get_wallet_stats.assert_not_called()


def test_setup_writes_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(main.app, ["setup"])

    assert result.exit_code == 0
    assert "CELOSCAN_API_KEY=" in (tmp_path / ".env").read_text()
