# REST client for the commerce platform: credentials, signing, token cache,
# the single-request dispatcher and the searchCriteria compiler.
from commerce.client import CommerceClient
from commerce.credentials import BearerCredentials, Credentials, SignedCredentials, resolve_credentials
from commerce.errors import (
    AuthError,
    CommerceError,
    ConfigurationError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from commerce.search_criteria import (
    CompiledSearch,
    ConditionType,
    Filter,
    SearchCriteriaRequest,
    SortOrder,
    build_search_criteria_from_input,
    compile_search_criteria,
    decode_search_criteria,
    encode_query,
)

__all__ = [
    "AuthError",
    "BearerCredentials",
    "CommerceClient",
    "CommerceError",
    "CompiledSearch",
    "ConditionType",
    "ConfigurationError",
    "Credentials",
    "Filter",
    "SearchCriteriaRequest",
    "SignedCredentials",
    "SortOrder",
    "TransportError",
    "UpstreamError",
    "ValidationError",
    "build_search_criteria_from_input",
    "compile_search_criteria",
    "decode_search_criteria",
    "encode_query",
    "resolve_credentials",
]
