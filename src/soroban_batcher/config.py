"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from soroban_batcher.models.config import BatcherConfig, CallConfig

NETWORK_PASSPHRASES = {
    "testnet": "Test SDF Network ; September 2015",
    "mainnet": "Public Global Stellar Network ; September 2015",
    "futurenet": "Test SDF Future Network ; October 2022",
}


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "SOROBAN_BATCHER_",
) -> BatcherConfig:
    """Load batcher configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (SOROBAN_BATCHER_SECRET, etc.)
        2. TOML config file
        3. Defaults from BatcherConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = BatcherConfig()

    # ── Batcher section ────────────────────────────────────
    batcher = raw.get("batcher", {})
    if (v := batcher.get("poll_interval")) is not None:
        cfg.poll_interval = float(v)
    if (v := batcher.get("min_target")) is not None:
        cfg.min_target = int(v)
    if (v := batcher.get("max_target")) is not None:
        cfg.max_target = int(v)
    if (v := batcher.get("seed")) is not None:
        cfg.seed = int(v)
    if (v := batcher.get("await_confirmation")) is not None:
        cfg.await_confirmation = bool(v)
    if (v := batcher.get("confirmation_timeout")) is not None:
        cfg.confirmation_timeout = int(v)
    if v := batcher.get("log_level"):
        cfg.log_level = str(v)

    # ── Stellar section ────────────────────────────────────
    stellar = raw.get("stellar", {})
    if v := stellar.get("network"):
        cfg.network = str(v)
    if v := stellar.get("rpc_url"):
        cfg.rpc_url = str(v)
    if v := stellar.get("network_passphrase"):
        cfg.network_passphrase = str(v)
    if v := stellar.get("keypair_secret"):
        cfg.keypair_secret = str(v)
    if (v := stellar.get("base_fee")) is not None:
        cfg.base_fee = int(v)

    # ── Call section ───────────────────────────────────────
    call = raw.get("call", {})
    cfg.call = CallConfig(
        contract_id=str(call.get("contract_id", "")),
        function=str(call.get("function", "")),
        args=[str(a) for a in call.get("args", [])],
    )

    # ── Storage section ────────────────────────────────────
    storage = raw.get("storage", {})
    if v := storage.get("db_path"):
        cfg.db_path = str(v)

    # ── Environment variable overrides (highest priority) ──
    if secret := os.environ.get(f"{env_prefix}SECRET"):
        cfg.keypair_secret = secret
    if net := os.environ.get(f"{env_prefix}NETWORK"):
        cfg.network = net
    if rpc := os.environ.get(f"{env_prefix}RPC_URL"):
        cfg.rpc_url = rpc
    if cid := os.environ.get(f"{env_prefix}CONTRACT_ID"):
        cfg.call.contract_id = cid
    if seed := os.environ.get(f"{env_prefix}SEED"):
        cfg.seed = int(seed)

    if not cfg.network_passphrase:
        cfg.network_passphrase = NETWORK_PASSPHRASES.get(cfg.network, "")

    # Expand ~ in paths
    if cfg.db_path != ":memory:":
        cfg.db_path = str(Path(cfg.db_path).expanduser())

    return cfg
