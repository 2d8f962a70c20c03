"""Exception hierarchy."""


class Ecs2K8sError(Exception):
    """Base class for all ecs2k8s errors."""


class ConversionError(Ecs2K8sError):
    """A task definition cannot be converted at all."""


class NoContainersError(ConversionError):
    """The task definition holds no container entries."""


class NoValidContainersError(ConversionError):
    """Every container of the task definition was skipped."""


class OutputError(Ecs2K8sError):
    """Generated files cannot be written."""


class OutputDirError(OutputError):
    """The output directory is missing, not a directory, or not writable."""


class InvalidNameError(OutputError):
    """A name used in a file path is empty or contains forbidden characters."""


class PathContainmentError(OutputError):
    """A resolved output path escapes the output directory."""


class TaskDefinitionLoadError(Ecs2K8sError):
    """A task definition file cannot be read or understood."""


class ManifestValidationError(Ecs2K8sError):
    """A generated manifest misses a required top-level field."""
