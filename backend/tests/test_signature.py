import pytest
from eth_account import Account
from eth_account.messages import encode_defunct

from arenahub.errors import InvalidSignatureFormat, TimestampExpired
from arenahub.services.leaderboard.replay import check_freshness
from arenahub.services.leaderboard.signature import build_challenge, recover_signer, verify_submission


KEY = '0x' + '33' * 32


def _sign(text):
    signed = Account.sign_message(encode_defunct(text=text), private_key=KEY)
    return '0x' + bytes(signed.signature).hex()


def test_challenge_format():
    assert build_challenge(500, 1700000000000) == 'Submit score: 500 at 1700000000000'
    assert build_challenge(0, 1) == 'Submit score: 0 at 1'


def test_recovers_signer():
    account = Account.from_key(KEY)
    message = build_challenge(42, 1700000000000)
    assert recover_signer(message, _sign(message)) == account.address


def test_verify_is_case_insensitive():
    address = Account.from_key(KEY).address
    signature = _sign(build_challenge(42, 1700000000000))
    assert verify_submission(address.lower(), 42, 1700000000000, signature)
    assert verify_submission(address.upper().replace('0X', '0x'), 42, 1700000000000, signature)


def test_mismatch_is_false_not_error():
    signature = _sign(build_challenge(42, 1700000000000))
    assert verify_submission('0x' + '00' * 20, 42, 1700000000000, signature) is False
    assert verify_submission(Account.from_key(KEY).address, 43, 1700000000000, signature) is False


@pytest.mark.parametrize('signature', ['', 'nothex', '0x1234', '0x' + 'ff' * 65])
def test_unparseable_signature(signature):
    with pytest.raises(InvalidSignatureFormat):
        recover_signer('Submit score: 1 at 1', signature)


def test_freshness_window_edges():
    now = 1_700_000_000_000
    check_freshness(now, now)
    check_freshness(now - 300000, now)
    check_freshness(now + 300000, now)
    with pytest.raises(TimestampExpired):
        check_freshness(now - 300001, now)
    with pytest.raises(TimestampExpired):
        check_freshness(now + 300001, now)


def test_freshness_window_is_configurable():
    with pytest.raises(TimestampExpired):
        check_freshness(1000, 2001, window_ms=1000)
    check_freshness(1000, 2000, window_ms=1000)
