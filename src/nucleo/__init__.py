"""
Top-level module, including resource and optional dependency management.
"""
from importlib import import_module
from importlib.metadata import metadata, PackageNotFoundError
from random import Random
from pathlib import Path


# Constants ------------------------------------------------------------------------------------------------------------
__all__ = [
    "alphabet",
    "cli",
    "io",
    "seq",
    "utils"
]

# Classes --------------------------------------------------------------------------------------------------------------
class Resources:
    """
    Holds global resources for nucleo.

    Attributes:
        package: Name of the package
        metadata: Package metadata
        rng: A random number generator instance, can be reused
        optional_packages: Set of optional packages that could be imported
    """
    def __init__(self, *optional_packages: str):
        """
        Parameters:
            optional_packages: Optional packages to check for, e.g. 'zstandard'
        """
        self.package: str = Path(__file__).parent.name
        self._metadata: 'PackageMetadata' = None  # Generated on demand
        self._rng: Random = None  # Generated on demand
        self.optional_packages: set[str] = set(filter(self._check_module, optional_packages))

    @property
    def metadata(self) -> 'PackageMetadata':
        if self._metadata is None:
            self._metadata = metadata(self.package)
        return self._metadata

    @property
    def version(self) -> str:
        try:
            return self.metadata['Version']
        except PackageNotFoundError:  # Running from a source tree without installing
            return 'unknown'

    @property
    def rng(self) -> Random:
        if self._rng is None:
            self._rng = Random()
        return self._rng

    @staticmethod
    def _check_module(module_name: str) -> bool:
        """Checks if a module can be imported.

        Args:
            module_name (str): The name of the module to check.

        Returns:
            bool: True if the module can be imported, False otherwise.
        """
        try:
            import_module(module_name)
            return True
        except ImportError:
            return False


class NucleoWarning(Warning):
    """
    A warning class for this package, making it easy to silence all our warning messages should you wish to.
    Consult the `python.warnings` module documentation for more details.

    Examples:
        >>> import warnings
        >>> from nucleo import NucleoWarning
        ... warnings.simplefilter('ignore', NucleoWarning)
    """

    pass


# Constants ------------------------------------------------------------------------------------------------------------
RESOURCES = Resources('zstandard')
