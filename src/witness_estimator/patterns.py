from __future__ import annotations

from collections import Counter
from collections.abc import Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# EIP-6800 code chunk payload
DEFAULT_CODE_BYTES_PER_ACCESS = 31


class AccessKind(str, Enum):
    balance = "balance"
    storage_slot = "storage_slot"
    code_chunk = "code_chunk"


class AccessPattern(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    accesses: tuple[AccessKind, ...] = ()
    code_bytes_per_access: int = Field(DEFAULT_CODE_BYTES_PER_ACCESS, ge=1)

    def __len__(self) -> int:
        return len(self.accesses)


def pattern_from_counts(
    counts: Mapping[AccessKind | str, int],
    name: str | None = None,
    code_bytes_per_access: int = DEFAULT_CODE_BYTES_PER_ACCESS,
) -> AccessPattern:
    """Expand per-kind counts into an ordered pattern: balances, then slots, then code."""
    normalized: dict[AccessKind, int] = {}
    for kind, n in counts.items():
        kind = AccessKind(kind)
        if n < 0:
            raise ValueError(f"access count must be non-negative: {kind.value}={n}")
        normalized[kind] = normalized.get(kind, 0) + int(n)

    accesses: list[AccessKind] = []
    for kind in AccessKind:
        accesses.extend([kind] * normalized.get(kind, 0))
    return AccessPattern(name=name, accesses=tuple(accesses), code_bytes_per_access=code_bytes_per_access)


def count_by_kind(pattern: AccessPattern) -> dict[AccessKind, int]:
    counter = Counter(pattern.accesses)
    return {kind: counter.get(kind, 0) for kind in AccessKind}


def single_account() -> AccessPattern:
    return pattern_from_counts({AccessKind.balance: 1}, name="Single Account Balance Check")


def storage_access(num_slots: int = 100) -> AccessPattern:
    return pattern_from_counts(
        {AccessKind.storage_slot: num_slots},
        name=f"Smart Contract Interaction ({num_slots} storage slots)",
    )


def contract_call_with_code(accounts: int = 2, storage_slots: int = 50, code_chunks: int = 1) -> AccessPattern:
    # caller and contract accounts, some storage, and the code being executed
    return pattern_from_counts(
        {
            AccessKind.balance: accounts,
            AccessKind.storage_slot: storage_slots,
            AccessKind.code_chunk: code_chunks,
        },
        name="Contract Call with Code Access",
    )


def full_block(state_accesses: int = 5_000) -> AccessPattern:
    # 15M gas / 2500 gas per access is ~6000 accesses; 5000 is the conservative worst case
    return pattern_from_counts(
        {AccessKind.balance: state_accesses},
        name=f"Full Block ({state_accesses} state accesses - worst case)",
    )


def default_patterns() -> list[AccessPattern]:
    return [single_account(), storage_access(), contract_call_with_code(), full_block()]
