"""Configuration constants for proxy-deployments library."""

# Project layout (relative to the project root)
MANIFEST_FILENAME = "upgrades.json"
NETWORK_FILENAME_TEMPLATE = "upgrades.{network}.json"
BUILD_CONTRACTS_DIR = ("build", "contracts")
DEPENDENCIES_DIR = "node_modules"

# Environment variable overriding the project root
PROJECT_ROOT_ENV = "PROXY_DEPLOYMENTS_ROOT"

# Contract listing sources
SOURCE_FROM_BUILD_DIR = "fromBuildDir"
SOURCE_FROM_LOCAL = "fromLocal"
SOURCE_ALL = "all"

# Answer key and values that choose how proxies are displayed
PICK_PROXY_BY = "pickProxyBy"
PICK_BY_ADDRESS = "byAddress"
PICK_BY_NAME = "byName"

# Separator label for the local project's section in choice lists
LOCAL_CONTRACTS_LABEL = "Local contracts"

# Modifier marking a method as an initializer
INITIALIZER_MODIFIER = "initializer"
