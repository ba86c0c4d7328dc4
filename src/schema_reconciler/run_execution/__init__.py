"""Run execution domain exports."""

from .reconciliation_use_cases import (
    MissingSchemaError,
    NoRecordTypesFoundError,
    RunExecutionError,
    execute_response_validation,
    execute_structural_comparison,
    execute_type_generation,
    list_endpoints,
    load_run_artifacts,
)
from .run_contracts import (
    CompareOutcome,
    CompareRequest,
    GenerateOutcome,
    GenerateRequest,
    RunArtifacts,
    SourceRequest,
    ValidateOutcome,
    ValidateRequest,
)

__all__ = [
    "CompareOutcome",
    "CompareRequest",
    "GenerateOutcome",
    "GenerateRequest",
    "RunArtifacts",
    "SourceRequest",
    "ValidateOutcome",
    "ValidateRequest",
    "MissingSchemaError",
    "NoRecordTypesFoundError",
    "RunExecutionError",
    "execute_response_validation",
    "execute_structural_comparison",
    "execute_type_generation",
    "list_endpoints",
    "load_run_artifacts",
]
