"""ABI fragments of the resolver contract used by the updater."""

from __future__ import annotations

from typing import Any

RESOLVER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "resolve",
        "stateMutability": "view",
        "inputs": [{"name": "name", "type": "string"}],
        "outputs": [{"name": "", "type": "address"}],
    },
    {
        "type": "function",
        "name": "update",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "name", "type": "string"},
            {"name": "owner", "type": "address"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "updateBatch",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_names", "type": "string[]"},
            {"name": "_owners", "type": "address[]"},
        ],
        "outputs": [],
    },
]
