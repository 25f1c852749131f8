"""Configuration models for the batcher."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CallConfig:
    """The contract call repeated by every transaction in a batch."""

    contract_id: str = ""
    function: str = ""
    args: list[str] = field(default_factory=list)  # "type:value" strings


@dataclass
class BatcherConfig:
    """Complete batcher configuration."""

    # Batch
    poll_interval: float = 0.5  # seconds between height polls
    min_target: int = 3
    max_target: int = 10
    seed: int | None = None  # None draws from OS entropy
    await_confirmation: bool = False
    confirmation_timeout: int = 30  # seconds
    log_level: str = "info"

    # Stellar
    network: str = "testnet"
    rpc_url: str = "https://soroban-testnet.stellar.org"
    network_passphrase: str = ""  # derived from network when empty
    keypair_secret: str = ""  # loaded from env var SOROBAN_BATCHER_SECRET
    base_fee: int = 100  # stroops

    # Call
    call: CallConfig = field(default_factory=CallConfig)

    # Storage
    db_path: str = "~/.soroban_batcher/history.db"

    def validate(self) -> list[str]:
        """Return a list of problems; empty when the config is usable."""
        problems: list[str] = []
        if self.min_target < 1:
            problems.append("min_target must be at least 1")
        if self.min_target > self.max_target:
            problems.append(
                f"min_target ({self.min_target}) exceeds max_target ({self.max_target})"
            )
        if self.poll_interval < 0:
            problems.append("poll_interval must not be negative")
        if self.confirmation_timeout <= 0:
            problems.append("confirmation_timeout must be positive")
        if self.base_fee <= 0:
            problems.append("base_fee must be positive")
        return problems
