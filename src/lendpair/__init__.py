__all__ = [
    # Errors
    "LendpairError",
    "InputError",
    "EncodingError",
    "ExternalFailure",
    "ArtifactError",
    # Nonce sequencing
    "SequenceCounter",
    # Parameter encoding
    "PrimitiveType",
    "ParameterSchema",
    "SchemaField",
    "EncodedBlob",
    "encode",
    "decode",
    "values_from_table",
    "PAIR_CONFIG",
    "PAIR_IMMUTABLES",
    "PAIR_CUSTOM_CONFIG",
    "PAIR_CONSTRUCTOR",
    "RATE_CONSTRUCTOR",
    "encode_pair_constructor",
    "encode_rate_constructor",
    # Transactions
    "PendingSubmission",
    "SubmissionResult",
    "plan_call",
    "plan_deployment",
    "dispatch",
    "confirm",
]

from .errors import (
    ArtifactError,
    EncodingError,
    ExternalFailure,
    InputError,
    LendpairError,
)
from .chain.nonce import SequenceCounter
from .codec import (
    PAIR_CONFIG,
    PAIR_CONSTRUCTOR,
    PAIR_CUSTOM_CONFIG,
    PAIR_IMMUTABLES,
    RATE_CONSTRUCTOR,
    EncodedBlob,
    ParameterSchema,
    PrimitiveType,
    SchemaField,
    decode,
    encode,
    encode_pair_constructor,
    encode_rate_constructor,
    values_from_table,
)
from .chain.tx import (
    PendingSubmission,
    SubmissionResult,
    confirm,
    dispatch,
    plan_call,
    plan_deployment,
)
