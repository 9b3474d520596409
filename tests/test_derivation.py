import pytest

from solana_relay.core.derivation import DerivationPath
from solana_relay.core.exceptions import UnknownScheme


def test_default_is_bip44():
    assert DerivationPath.default() is DerivationPath.BIP44
    assert DerivationPath.default().value == "m/44'/501'/0'/0'"


def test_lookup_by_path_and_name():
    assert DerivationPath("m/501'/0'/0/0") is DerivationPath.DEPRECATED
    assert DerivationPath.parse("bip44") is DerivationPath.BIP44
    assert DerivationPath.parse("Deprecated") is DerivationPath.DEPRECATED
    assert DerivationPath.parse("m/44'/501'/0'/0'") is DerivationPath.BIP44


@pytest.mark.parametrize("identifier", ["m/44'/60'/0'/0/0", "ledger", ""])
def test_unknown_identifier(identifier):
    with pytest.raises(UnknownScheme):
        DerivationPath.parse(identifier)


def test_unknown_value_is_also_a_value_error():
    with pytest.raises(ValueError):
        DerivationPath("m/0")


def test_member_set_is_closed():
    assert len(DerivationPath) == 2
