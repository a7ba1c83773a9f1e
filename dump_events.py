#!/usr/bin/env python3
"""
dump_events.py

Print every event a contract has ever emitted as a single JSON line.

  python dump_events.py http://localhost:8545 out/L1Escrow.abi 0xdeadbeef

Exit codes:
  0 = events printed
  1 = wrong number of arguments
  2 = failed to read / parse the ABI file
  3 = RPC query failed
"""
import json
import sys
from typing import Any, Dict, List

from eth_abi.exceptions import DecodingError
from eth_utils import event_abi_to_log_topic
from web3 import HTTPProvider, IPCProvider, LegacyWebSocketProvider, Web3
from web3.datastructures import AttributeDict
from web3.exceptions import LogTopicError, MismatchedABI

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ABI = 2
EXIT_RPC = 3

FROM_BLOCK = 0
TO_BLOCK = "latest"


def connect(rpc_url: str) -> Web3:
    """Build a lazy Web3 handle; nothing is sent until the first request."""
    if rpc_url.startswith(("http://", "https://")):
        provider = HTTPProvider(rpc_url)
    elif rpc_url.startswith(("ws://", "wss://")):
        provider = LegacyWebSocketProvider(rpc_url)
    else:
        provider = IPCProvider(rpc_url)
    return Web3(provider)


def read_abi(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        abi = json.load(f)
    # Foundry / Hardhat artifacts wrap the ABI
    if isinstance(abi, dict) and "abi" in abi:
        abi = abi["abi"]
    return abi


def bind_event(w3: Web3, address: str, entry: Dict[str, Any]):
    """Bind a single event ABI entry, so overloads sharing a name stay distinct."""
    return w3.eth.contract(address=address, abi=[entry]).events[entry["name"]]()


def decode_log(topic_map: Dict[bytes, Any], anonymous: List[Any], log) -> AttributeDict:
    """Decode one raw log against the contract ABI, or pass it through with event=None."""
    topics = log.get("topics") or []
    if topics:
        event = topic_map.get(bytes(topics[0]))
        if event is not None:
            return event.process_log(log)

    for event in anonymous:
        try:
            return event.process_log(log)
        except (MismatchedABI, LogTopicError, DecodingError):
            continue

    return AttributeDict({**dict(log), "event": None})


def fetch_all_events(w3: Web3, abi: Any, contract_address: str) -> List[AttributeDict]:
    address = Web3.to_checksum_address(contract_address)
    # full binding validates the ABI before any request
    w3.eth.contract(address=address, abi=abi)

    # keyed by topic0, one binding per signature
    topic_map: Dict[bytes, Any] = {}
    anonymous: List[Any] = []
    for entry in abi:
        if entry.get("type") != "event":
            continue
        if entry.get("anonymous"):
            anonymous.append(bind_event(w3, address, entry))
        else:
            topic_map[event_abi_to_log_topic(entry)] = bind_event(w3, address, entry)

    logs = w3.eth.get_logs({
        "address": address,
        "fromBlock": FROM_BLOCK,
        "toBlock": TO_BLOCK,
    })
    return [decode_log(topic_map, anonymous, log) for log in logs]


def dump_events(rpc_url: str, abi_path: str, contract_address: str) -> int:
    w3 = connect(rpc_url)

    try:
        abi = read_abi(abi_path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        print(f"error: {e}")
        return EXIT_ABI

    try:
        events = fetch_all_events(w3, abi, contract_address)
    except Exception as e:
        print(f"error: {e}")
        return EXIT_RPC

    print(Web3.to_json(events))
    return EXIT_OK


def print_usage(program: str) -> None:
    print(f"Usage: {program} http://eth-rpc-url path/to/abi/file contract")
    print(f"E.g.:  {program} http://localhost:8545 e2e/wormhole/optimism-dai-bridge-contracts/out/L1Escrow.abi 0xdeadbeef")


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv

    if len(argv) != 4:
        print_usage(argv[0] if argv else "dump-events")
        return EXIT_USAGE

    return dump_events(argv[1], argv[2], argv[3])


if __name__ == "__main__":
    sys.exit(main())
