"""Centralized constants for gqlcompose.

Single source of truth for file suffixes, configuration file names and
environment variable names used across the package.
"""

# ============================================================================
# SCHEMA DOCUMENTS
# ============================================================================

# Candidate document suffixes, matched case-insensitively
DEFAULT_SCHEMA_EXTENSIONS = (".graphql", ".gql")

# ============================================================================
# CONFIGURATION
# ============================================================================

# Optional JSON config, looked up in the working directory
CONFIG_FILE_NAME = ".gqlcompose.json"

# Prefix for GQLCOMPOSE_<SECTION>_<KEY> overrides
ENV_PREFIX = "GQLCOMPOSE"

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================

ENV_LOG_LEVEL = "GQLCOMPOSE_LOG_LEVEL"
ENV_LOG_JSON = "GQLCOMPOSE_LOG_JSON"
ENV_LOG_FILE = "GQLCOMPOSE_LOG_FILE"
