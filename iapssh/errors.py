"""Error types raised by the iapssh core and reported by the CLI."""

PROVIDER_HINT = "Make sure the input arguments are correct and you have access to the instance!"


class IapSshError(Exception):
    """Base class for every failure the CLI reports to the operator."""


class ProviderInvocationError(IapSshError):
    """gcloud failed, was not found, or printed nothing."""

    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"Error getting SSH command: {detail}\n{PROVIDER_HINT}")


class NoOutputError(ProviderInvocationError):
    """The provider command succeeded but its output was empty."""

    def __init__(self, detail="provider command produced no output"):
        super().__init__(detail)


class ConflictError(IapSshError):
    """A Host block for the alias exists and --force was not given."""

    def __init__(self, alias):
        self.alias = alias
        super().__init__(f"SSH config entry already exists for {alias}. Use --force to update")


class FileReadError(IapSshError):
    def __init__(self, path, cause):
        self.path = path
        super().__init__(f"error reading SSH config file {path}: {cause}")


class FileWriteError(IapSshError):
    def __init__(self, path, cause):
        self.path = path
        super().__init__(f"error writing to SSH config file {path}: {cause}")


class ConfigError(IapSshError):
    """The YAML defaults file exists but cannot be used."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Invalid defaults file '{path}': {reason}")
