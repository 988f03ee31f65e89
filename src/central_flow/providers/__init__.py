"""Provider contract and registry."""

from central_flow.providers.base import (
    Candidate,
    Provider,
    ProviderContext,
    candidate_problems,
    coerce_candidate,
    contract_problems,
    provider_priority,
    validate_provider,
)
from central_flow.providers.registry import LoadFailure, ProviderRegistry

__all__ = [
    "Candidate",
    "LoadFailure",
    "Provider",
    "ProviderContext",
    "ProviderRegistry",
    "candidate_problems",
    "coerce_candidate",
    "contract_problems",
    "provider_priority",
    "validate_provider",
]
