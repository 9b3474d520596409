import pytest

from solana_relay.config import load_config
from solana_relay.core.derivation import DerivationPath
from solana_relay.fee_relayer import DEFAULT_FEE_RELAYER_URL


def test_defaults():
    cfg = load_config({"SOLANA_NODE_RPC_ENDPOINT": "http://rpc.test"})
    assert cfg["FEE_RELAYER_URL"] == DEFAULT_FEE_RELAYER_URL
    assert cfg["FEE_RELAYER_TIMEOUT_SECONDS"] == 30.0
    assert cfg["RPC_COMMITMENT"] == "confirmed"
    assert cfg["DERIVATION_PATH"] is DerivationPath.BIP44
    assert cfg["SOLANA_PRIVATE_KEY"] == ""


def test_missing_rpc_endpoint():
    with pytest.raises(ValueError, match="SOLANA_NODE_RPC_ENDPOINT"):
        load_config({})


def test_overrides_and_bad_values_fall_back():
    cfg = load_config({
        "SOLANA_NODE_RPC_ENDPOINT": "http://rpc.test",
        "FEE_RELAYER_URL": "https://relay.test",
        "FEE_RELAYER_TIMEOUT_SECONDS": "soon",
        "DERIVATION_PATH": "deprecated",
    })
    assert cfg["FEE_RELAYER_URL"] == "https://relay.test"
    assert cfg["FEE_RELAYER_TIMEOUT_SECONDS"] == 30.0
    assert cfg["DERIVATION_PATH"] is DerivationPath.DEPRECATED


def test_unknown_derivation_path_uses_default():
    cfg = load_config({"SOLANA_NODE_RPC_ENDPOINT": "http://rpc.test", "DERIVATION_PATH": "m/1'"})
    assert cfg["DERIVATION_PATH"] is DerivationPath.default()
