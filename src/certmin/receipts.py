"""
Receipt Chain for Auditable Searches

Records branch-and-bound events in a hash-linked chain so that a run
can be checked afterwards: every receipt's hash covers the previous
receipt's hash, so any edit to the trail breaks verification.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List
from enum import Enum
from pathlib import Path

from .core.canonical_json import canonical_dumps, canonical_hash


GENESIS = "genesis"


class ActionType(Enum):
    """Types of search actions that generate receipts."""
    INIT = "init"
    EVALUATE = "evaluate"
    PRUNE = "prune"
    TIGHTEN = "tighten"
    RECORD = "record"
    SPLIT = "split"
    REDUCE = "reduce"
    TERMINATE = "terminate"


@dataclass
class Receipt:
    """
    A single receipt in the chain.

    Each receipt contains:
    - Sequence number
    - Action type and parameters
    - Link to previous receipt
    - Self-hash for chain integrity
    """
    sequence: int
    action: ActionType
    params: Dict[str, Any]
    prev_hash: str
    receipt_hash: str = ""

    def __post_init__(self):
        if not self.receipt_hash:
            self.receipt_hash = self._compute_hash()

    def _compute_hash(self) -> str:
        data = {
            "sequence": self.sequence,
            "action": self.action.value,
            "params": self.params,
            "prev_hash": self.prev_hash
        }
        return canonical_hash(data)

    def verify(self) -> bool:
        """Verify the receipt hash is correct."""
        return self.receipt_hash == self._compute_hash()

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "action": self.action.value,
            "params": self.params,
            "prev_hash": self.prev_hash,
            "receipt_hash": self.receipt_hash
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Receipt':
        return cls(
            sequence=data["sequence"],
            action=ActionType(data["action"]),
            params=data["params"],
            prev_hash=data["prev_hash"],
            receipt_hash=data["receipt_hash"]
        )


class ReceiptChain:
    """
    A chain of receipts forming an audit trail of one search.

    Each worker owns its own chain; the coordinator records the
    reduction in a chain that references the workers' final hashes.
    """

    def __init__(self):
        self.receipts: List[Receipt] = []
        self._prev_hash: str = GENESIS

    def add_receipt(self, action: ActionType, params: Dict[str, Any]) -> Receipt:
        """
        Append a new receipt to the chain.

        Args:
            action: The action type
            params: Action parameters (must be JSON-serialisable)

        Returns:
            The created receipt
        """
        receipt = Receipt(
            sequence=len(self.receipts),
            action=action,
            params=params,
            prev_hash=self._prev_hash
        )

        self.receipts.append(receipt)
        self._prev_hash = receipt.receipt_hash

        return receipt

    def verify_chain(self) -> bool:
        """
        Verify the entire chain is valid.

        Checks:
        1. Each receipt's hash is correct
        2. Chain linking is correct (prev_hash matches)
        """
        prev_hash = GENESIS
        for receipt in self.receipts:
            if not receipt.verify():
                return False
            if receipt.prev_hash != prev_hash:
                return False
            prev_hash = receipt.receipt_hash

        return True

    def count(self, action: ActionType) -> int:
        return sum(1 for r in self.receipts if r.action == action)

    @property
    def final_hash(self) -> str:
        """Get the hash of the last receipt."""
        if not self.receipts:
            return GENESIS
        return self.receipts[-1].receipt_hash

    def __len__(self) -> int:
        return len(self.receipts)

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "receipts": [r.to_canonical() for r in self.receipts],
            "final_hash": self.final_hash
        }

    def save_json(self, path: Path) -> None:
        with open(path, 'w') as f:
            f.write(canonical_dumps(self.to_canonical(), indent=2))

    @classmethod
    def load_json(cls, path: Path) -> 'ReceiptChain':
        with open(path, 'r') as f:
            data = json.load(f)

        chain = cls()
        for r_data in data["receipts"]:
            receipt = Receipt.from_dict(r_data)
            chain.receipts.append(receipt)
            chain._prev_hash = receipt.receipt_hash

        return chain
