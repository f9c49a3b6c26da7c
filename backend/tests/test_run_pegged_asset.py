from unittest.mock import patch

import pandas as pd
import pytest

import run_pegged_asset
from fakes import FakeChainApi

DEI = "0xDE1E704dae0B4051e80DAbB26ab6ad6c12262DA0"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setenv("SDK_CACHE_FILE", str(tmp_path / "cache" / "sdk-cache.json"))
    monkeypatch.setenv("REPORT_DIR", str(tmp_path / "reports"))
    monkeypatch.delenv("DISCORD_COMMS", raising=False)
    monkeypatch.delenv("PEG_TYPE", raising=False)
    monkeypatch.setattr("peggedsupply.config.load_dotenv", lambda: None)


def test_success_prints_summary(capsys, tmp_path):
    apis = {"fantom": FakeChainApi("fantom", supplies={DEI: 42 * 10**18})}
    with patch("peggedsupply.adapters.adapter_pegged_supply.get_chain_api", side_effect=lambda chain, *a, **kw: apis[chain]):
        assert run_pegged_asset.main(["dei_token", "--save"]) == 0

    out = capsys.readouterr().out
    assert "Total circulating (peggedUSD): 42.00" in out
    assert (tmp_path / "reports" / "fact_pegged_supply.csv").exists()
    assert (tmp_path / "cache" / "sdk-cache.json").exists()


def test_fatal_error_exits_with_one(capsys):
    apis = {"fantom": FakeChainApi("fantom", supplies={DEI: 0})}
    with patch("peggedsupply.adapters.adapter_pegged_supply.get_chain_api", side_effect=lambda chain, *a, **kw: apis[chain]):
        with patch("run_pegged_asset.send_discord_message") as discord:
            assert run_pegged_asset.main(["dei_token"]) == 1

    assert "------ ERROR ------" in capsys.readouterr().out
    discord.assert_not_called()


def test_unknown_asset_exits_with_one(capsys):
    assert run_pegged_asset.main(["tether"]) == 1
    assert "------ ERROR ------" in capsys.readouterr().out


def test_save_normalises_asset_name(tmp_path):
    apis = {"fantom": FakeChainApi("fantom", supplies={DEI: 42 * 10**18})}
    with patch("peggedsupply.adapters.adapter_pegged_supply.get_chain_api", side_effect=lambda chain, *a, **kw: apis[chain]):
        assert run_pegged_asset.main(["dei-token", "--save"]) == 0

    df = pd.read_csv(tmp_path / "reports" / "fact_pegged_supply.csv")
    assert set(df.asset) == {"dei_token"}


def test_save_failure_prints_banner(capsys):
    apis = {"fantom": FakeChainApi("fantom", supplies={DEI: 42 * 10**18})}
    with patch("peggedsupply.adapters.adapter_pegged_supply.get_chain_api", side_effect=lambda chain, *a, **kw: apis[chain]):
        with patch("peggedsupply.misc.report_store.CsvReportStore.upsert_table", side_effect=OSError("No space left on device")):
            assert run_pegged_asset.main(["dei_token", "--save"]) == 1

    assert "------ ERROR ------" in capsys.readouterr().out
