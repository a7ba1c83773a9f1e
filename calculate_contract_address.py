import sys
from eth_utils import keccak, to_checksum_address, to_bytes
import rlp

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_INPUT = 2


def nonce_to_hex(nonce):
    """
    Convert a nonce to its minimal, even-length hex representation (no 0x prefix).

    Nonce 0 becomes the empty string, which RLP encodes as the empty byte string.

    :param nonce: The nonce as an int, a decimal string or a 0x-prefixed hex string
    :return: The hex digits of the nonce
    """
    if isinstance(nonce, str):
        nonce = nonce.strip()
        if nonce.lower().startswith("0x"):
            nonce = int(nonce, 16)
        else:
            nonce = int(nonce)
    elif isinstance(nonce, bool) or not isinstance(nonce, int):
        raise ValueError(f"Nonce must be an integer, got {nonce!r}")

    if nonce < 0:
        raise ValueError(f"Nonce must be non-negative, got {nonce}")
    if nonce == 0:
        return ""

    digits = format(nonce, "x")
    return digits if len(digits) % 2 == 0 else "0" + digits


def calculate_contract_address(eoa_address, nonce):
    """
    Calculate the contract address that would be created by the given EOA address and nonce.

    :param eoa_address: The address of the EOA deploying the contract
    :param nonce: The nonce of the EOA for this deployment
    :return: The calculated contract address, 40 lower-case hex characters without 0x
    """
    # Ensure the EOA address is in the correct format
    eoa_address = to_checksum_address(eoa_address)

    # RLP encode the address and nonce
    rlp_encoded = rlp.encode([to_bytes(hexstr=eoa_address), bytes.fromhex(nonce_to_hex(nonce))])

    # Keccak-256 hash the RLP encoded data
    hash_result = keccak(rlp_encoded)

    # Take the last 20 bytes (40 hex characters) of the hash result
    return hash_result[-20:].hex()


def print_usage(program):
    print(f"Usage: {program} ETH_FROM_address nonce")


def main(argv=None):
    if argv is None:
        argv = sys.argv

    if len(argv) != 3:
        print_usage(argv[0] if argv else "calculate-contract-address")
        return EXIT_USAGE

    eoa_address, nonce = argv[1], argv[2]
    try:
        contract_address = calculate_contract_address(eoa_address, nonce)
    except ValueError as e:
        print(f"error: {e}")
        return EXIT_INPUT

    print(contract_address)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
