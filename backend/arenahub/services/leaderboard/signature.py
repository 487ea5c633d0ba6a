from eth_account import Account
from eth_account.messages import encode_defunct

from arenahub.errors import InvalidSignatureFormat


def build_challenge(score: int, timestamp: int) -> str:
    """The exact text a wallet signs to submit `score` at `timestamp`."""
    return f"Submit score: {int(score)} at {int(timestamp)}"


def recover_signer(message: str, signature: str) -> str:
    """Recover the address that personal-signed `message`.

    Raises InvalidSignatureFormat when the signature cannot be decoded or
    recovery fails.
    """
    try:
        return Account.recover_message(encode_defunct(text=message), signature=signature)
    except Exception as e:
        raise InvalidSignatureFormat(str(e))


def verify_submission(address: str, score: int, timestamp: int, signature: str) -> bool:
    recovered = recover_signer(build_challenge(score, timestamp), signature)
    return recovered.lower() == address.lower()
