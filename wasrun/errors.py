"""Exceptions raised while loading and calling WebAssembly modules."""


class WasRunError(Exception):
    """Base class for everything wasrun raises on purpose."""


class ModuleLoadError(WasRunError):
    """The module file could not be read, compiled or instantiated."""


class ExportNotFoundError(WasRunError):
    def __init__(self, name, available=None):
        self.name = name
        self.available = list(available or [])
        msg = f"export {name!r} not found in module"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class ExportCallError(WasRunError):
    """The export exists but could not be called with the given arguments."""


class ConfigError(WasRunError):
    pass
