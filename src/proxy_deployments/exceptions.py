"""Custom exception classes for proxy-deployments library."""


class ProxyDeploymentsError(Exception):
    """Base exception for proxy-deployments errors."""

    pass


class ManifestNotFoundError(ProxyDeploymentsError, FileNotFoundError):
    """Raised when the project manifest file is not found."""

    pass


class ManifestError(ProxyDeploymentsError, ValueError):
    """Raised when a manifest, network file or build artifact is malformed."""

    pass


class InteractiveInputError(ProxyDeploymentsError, RuntimeError):
    """Raised when an interactive prompt round fails or is aborted."""

    pass
