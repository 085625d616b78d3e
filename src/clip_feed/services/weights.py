"""Voter weight policy used by the vote ledger."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from clip_feed.core.settings import settings


@dataclass(frozen=True)
class VoterWeightPolicy:
    """Map a voter identity to the weight its vote contributes.

    Every voter weighs ``default`` unless listed in ``overrides``. Listed
    voters are "elevated": they may weigh more and skip the daily vote limit.
    """

    default: int = 1
    overrides: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.default < 1:
            raise ValueError("Default vote weight must be a positive integer")
        for voter_id, weight in self.overrides.items():
            if weight < 1:
                raise ValueError(f"Vote weight for {voter_id!r} must be a positive integer")
        object.__setattr__(self, "overrides", MappingProxyType(dict(self.overrides)))

    def __call__(self, voter_id: str) -> int:
        return self.weight(voter_id)

    def weight(self, voter_id: str) -> int:
        """Return the weight for ``voter_id``."""
        return self.overrides.get(voter_id, self.default)

    def is_elevated(self, voter_id: str) -> bool:
        """Return True when the voter is on the override list."""
        return voter_id in self.overrides


def get_weight_policy() -> VoterWeightPolicy:
    """Build the policy from application settings."""
    return VoterWeightPolicy(
        default=settings.default_vote_weight,
        overrides=settings.elevated_voter_weights,
    )
