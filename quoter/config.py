"""Quoter configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from quoter.constants import BASE_GAS, HOP_GAS, SPLIT_ROUTING_ITERATIONS


def _env_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class QuoterConfig:
    """Centralized configuration for quote computation.

    Callers bound the engine's runtime through max_hops, max_split_routes
    and split_iterations; there is no timeout inside the engine.

    Attributes:
        max_hops: Maximum number of pools in a path
        max_split_routes: Candidate routes considered for splitting (K)
        split_iterations: Number of chunks the input is cut into (N)
        base_gas: Gas for the first swap of a route
        hop_gas: Gas for every additional hop
        max_workers: Thread pool size for evaluation scans (1 = inline)
        prefilter_relevant_pools: Drop pools that neither touch the pair nor
            connect two base currencies before path search
    """

    max_hops: int = 3
    max_split_routes: int = 5
    split_iterations: int = SPLIT_ROUTING_ITERATIONS
    base_gas: int = BASE_GAS
    hop_gas: int = HOP_GAS
    max_workers: int = 4
    prefilter_relevant_pools: bool = False

    def __post_init__(self) -> None:
        if self.max_split_routes < 1:
            raise ValueError(f"max_split_routes must be at least 1, got {self.max_split_routes}")
        if self.split_iterations < 1:
            raise ValueError(f"split_iterations must be at least 1, got {self.split_iterations}")
        if self.base_gas < 0 or self.hop_gas < 0:
            raise ValueError("Gas estimates cannot be negative")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> QuoterConfig:
        """Build a config from QUOTER_* environment variables.

        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is not a valid number
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            max_hops=int(env.get("QUOTER_MAX_HOPS", defaults.max_hops)),
            max_split_routes=int(env.get("QUOTER_MAX_SPLIT_ROUTES", defaults.max_split_routes)),
            split_iterations=int(env.get("QUOTER_SPLIT_ITERATIONS", defaults.split_iterations)),
            base_gas=int(env.get("QUOTER_BASE_GAS", defaults.base_gas)),
            hop_gas=int(env.get("QUOTER_HOP_GAS", defaults.hop_gas)),
            max_workers=int(env.get("QUOTER_MAX_WORKERS", defaults.max_workers)),
            prefilter_relevant_pools=_env_bool(
                env.get("QUOTER_PREFILTER_POOLS", str(defaults.prefilter_relevant_pools))
            ),
        )


# Default configuration instance
DEFAULT_QUOTER_CONFIG = QuoterConfig()
