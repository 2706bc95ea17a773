"""
The module base class.

Provides the common interface used to interact with modules at the most
basic level: inspecting metadata (name, description, authors, ...),
managing the per-instance data store, replicating for execution, and
inheriting lineage from a parent module.
"""

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple, Type, Union

from ...clone import duplicate
from ...config import get_config
from ...errors import FailureReason, OperationFailure
from ..datastore import REPLICANT_EXTENSIONS, VERBOSE, WORKSPACE, ModuleDataStore
from ..descriptor import Author, Descriptor, Reference, build_descriptor, merge_defaults
from ..extensions import Extension, ExtensionRef, ExtensionRegistry
from ..options import OptionContainer, OptionSet, opt_bool, opt_string
from . import lineage, queries

logger = logging.getLogger("modbase.module")


class CheckCode(str, Enum):
    """Result of a vulnerability check."""

    UNKNOWN = "unknown"
    SAFE = "safe"
    DETECTED = "detected"
    APPEARS = "appears"
    VULNERABLE = "vulnerable"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class ModuleTemplate:
    """
    Read-only load-time record for a module class.

    Bound exactly once when the class is loaded; every working instance is
    built fresh from it.
    """

    module_class: Type["Module"]
    file_path: Optional[str] = None
    framework: Any = None

    @classmethod
    def bind(cls, module_class: Type["Module"], file_path: Optional[str] = None,
             framework: Any = None) -> "ModuleTemplate":
        if module_class.__dict__.get("template") is not None:
            raise RuntimeError(f"{module_class.__qualname__} is already bound to a template")

        template = cls(module_class=module_class, file_path=file_path, framework=framework)
        module_class.template = template
        logger.debug(f"Bound {module_class.__qualname__} (path: {file_path})")
        return template

    @property
    def orig_cls(self) -> Type["Module"]:
        return self.module_class

    def instantiate(self) -> "Module":
        """Create a fresh working instance."""
        return self.module_class()


class Module:
    """
    Base class for every module.

    Subclasses must be constructible without arguments; replication relies
    on it. They pass their metadata up through merge_info()::

        class Scanner(Module):
            def __init__(self, info=None):
                super().__init__(merge_info(info, {"Name": "Scanner", ...}))
    """

    template: ClassVar[Optional[ModuleTemplate]] = None

    REPLICANT_EXTENSION_DS_KEY: ClassVar[str] = REPLICANT_EXTENSIONS
    MATCH_KEYS: ClassVar[FrozenSet[str]] = queries.MATCH_KEYS

    # Instance fields replicate() sets itself instead of duplicating
    _REPLICATION_MANAGED: ClassVar[FrozenSet[str]] = frozenset({
        "descriptor",
        "datastore",
        "user_input",
        "user_output",
        "module_store",
        "_extensions",
        "_extension_methods",
    })

    def __init__(
        self,
        info: Optional[Mapping[str, Any]] = None,
        options: Optional[OptionContainer] = None,
        extension_registry: Optional[ExtensionRegistry] = None,
    ):
        """
        Initialize module from its metadata.

        Args:
            info: Metadata mapping (Name, Description, Author, Platform, ...)
            options: Option container (default: a new OptionSet)
            extension_registry: Registry used to apply extensions
        """
        self._module_info_copy: Dict[str, Any] = dict(info or {})
        self.uuid = str(uuid.uuid4())
        self.log = logging.LoggerAdapter(logger, {"module_uuid": self.uuid})

        default_license = get_config().default_license
        self.module_info = merge_defaults(info, default_license)
        self.descriptor: Descriptor = build_descriptor(info, default_license)

        # Create and initialize the option container for this module
        self.options = options if options is not None else OptionSet()
        self.options.add_options(self.module_info.get("Options"), type(self))
        self.options.add_advanced_options(self.module_info.get("AdvancedOptions"), type(self))
        self.options.add_evasion_options(self.module_info.get("EvasionOptions"), type(self))

        self.datastore = ModuleDataStore(self.options)
        self.import_defaults()

        self.module_store: Dict[str, Any] = {}
        self.job_id: Optional[str] = None
        self.error: Optional[BaseException] = None
        self.user_data: Any = None
        self.user_input: Any = None
        self.user_output: Any = None

        self.extension_registry = extension_registry or ExtensionRegistry()
        self._extensions: Dict[str, Extension] = {}
        self._extension_methods: Dict[str, str] = {}

        # Allow all modules to track their current workspace
        self.register_advanced_options(
            [
                opt_string(WORKSPACE, description="Specify the workspace for this module"),
                opt_bool(VERBOSE, description="Enable detailed status messages", default=False),
            ],
            Module,
        )

    # ------------------------------------------------------------------
    # Class-level template
    # ------------------------------------------------------------------

    @classmethod
    def _template(cls) -> Optional[ModuleTemplate]:
        return cls.__dict__.get("template")

    @property
    def orig_cls(self) -> Type["Module"]:
        """The unduplicated class this module was loaded as."""
        template = self._template()
        return template.orig_cls if template else type(self)

    @property
    def file_path(self) -> Optional[str]:
        """The path the module was loaded from."""
        template = self._template()
        return template.file_path if template else None

    @property
    def framework(self) -> Any:
        template = self._template()
        return template.framework if template else None

    @classmethod
    def is_usable(cls) -> bool:
        """Whether the module can run on this system. All modules are by default."""
        return True

    @classmethod
    def cached(cls) -> bool:
        """False since this is the real module."""
        return False

    # ------------------------------------------------------------------
    # Descriptor accessors
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @property
    def version(self) -> str:
        return self.descriptor.version

    @property
    def authors(self) -> Tuple[Author, ...]:
        return self.descriptor.authors

    @property
    def arch(self) -> FrozenSet[str]:
        return self.descriptor.architectures

    @property
    def platform(self) -> FrozenSet[str]:
        return self.descriptor.platforms

    @property
    def references(self) -> Tuple[Reference, ...]:
        return self.descriptor.references

    @property
    def license(self) -> str:
        return self.descriptor.license

    @property
    def privileged(self) -> bool:
        return self.descriptor.privileged

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def import_defaults(self) -> int:
        """Seed the data store with option defaults that are not already set."""
        return self.datastore.import_defaults(self.options.specs())

    def register_options(self, specs: Iterable[Any], owner: Any = None) -> None:
        self.options.add_options(specs, owner or type(self))
        self.import_defaults()

    def register_advanced_options(self, specs: Iterable[Any], owner: Any = None) -> None:
        self.options.add_advanced_options(specs, owner or type(self))
        self.import_defaults()

    def register_evasion_options(self, specs: Iterable[Any], owner: Any = None) -> None:
        self.options.add_evasion_options(specs, owner or type(self))
        self.import_defaults()

    # ------------------------------------------------------------------
    # Replication and extensions
    # ------------------------------------------------------------------

    def replicate(self) -> "Module":
        """
        Create a fresh, independent copy of this module for one execution.

        The copy is built from the bound template when the class has one.

        The copy gets duplicates of every instance field, a deep copy of the
        data store, the same input/output channels, a shallow copy of the
        module store, and every registered extension applied.
        """
        template = self._template()
        obj = template.instantiate() if template else type(self)()

        for key, value in vars(self).items():
            if key in self._REPLICATION_MANAGED or key in self._extension_methods:
                continue
            setattr(obj, key, duplicate(value))

        # Descriptors are immutable, so the copy can share this one
        obj.descriptor = self.descriptor
        obj.datastore = self.datastore.copy(options=obj.options)
        obj.user_input = self.user_input
        obj.user_output = self.user_output
        obj.module_store = dict(self.module_store)

        obj.perform_extensions()
        self.log.debug(f"Replicated {self.name}")
        return obj

    def register_extensions(self, *refs: ExtensionRef) -> list:
        """Record extensions to apply to every replica of this module."""
        return self.extension_registry.register(self.datastore, *refs)

    def perform_extensions(self) -> int:
        """Attach the extensions recorded in the data store."""
        return self.extension_registry.apply(self)

    def has_extension(self, identifier: str) -> bool:
        return identifier in self._extensions

    @property
    def extensions(self) -> Tuple[str, ...]:
        """Identifiers of the extensions attached to this instance."""
        return tuple(self._extensions)

    def attach_extension(self, identifier: str, extension: Extension) -> bool:
        """
        Bind an extension's exported methods onto this instance.

        Either every exported method is bound or none is.

        Returns:
            False if an extension with this identifier is already attached

        Raises:
            ValueError: an export would replace private or managed state
        """
        if identifier in self._extensions:
            return False

        methods = {}
        for method_name in extension.exported_names():
            if method_name.startswith("_") or method_name in self._REPLICATION_MANAGED:
                raise ValueError(f"Extension {identifier} cannot export {method_name!r}")
            methods[method_name] = getattr(extension, method_name)

        # Nothing is bound until every export has resolved
        for method_name, method in methods.items():
            setattr(self, method_name, method)
            self._extension_methods[method_name] = identifier

        self._extensions[identifier] = extension
        return True

    # ------------------------------------------------------------------
    # Lineage
    # ------------------------------------------------------------------

    def register_parent(self, parent: "Module") -> None:
        """Inherit owner, workspace and parent identity from parent."""
        lineage.register_parent(self, parent)

    def owner(self) -> str:
        """The user this module runs on behalf of."""
        return lineage.resolve_owner(self.datastore)

    def workspace(self) -> Optional[str]:
        """The configured workspace, else the framework database's active one."""
        workspace = self.datastore.get(WORKSPACE)
        if workspace:
            return workspace

        db = getattr(self.framework, "db", None)
        if db is not None and getattr(db, "active", False) and getattr(db, "workspace", None):
            return db.workspace.name
        return None

    # ------------------------------------------------------------------
    # Capability queries
    # ------------------------------------------------------------------

    def platform_matches(self, candidate: Union[str, Iterable[str]]) -> bool:
        """Check if this module is compatible with the supplied platforms."""
        return queries.platform_matches(self.platform, candidate)

    def platform_to_s(self) -> str:
        """Comma separated list of supported platforms."""
        if self.descriptor.all_platforms:
            return "All"
        return ", ".join(sorted(self.platform))

    def is_debugging(self) -> bool:
        """True if datastore['DEBUG'] is set to 1, true or yes."""
        return queries.flag_enabled(self.datastore.get("DEBUG"))

    def user_data_is_match(self) -> bool:
        """Whether user_data contains everything needed to record a match result."""
        return queries.user_data_is_match(self.user_data)

    def is_derived_implementor(self, parent: type, method_name: str) -> bool:
        """Whether this module's class overrides method_name relative to parent."""
        return getattr(type(self), method_name, None) is not getattr(parent, method_name, None)

    def check(self) -> CheckCode:
        """Check whether the target is vulnerable. Overridden by exploit modules."""
        return CheckCode.UNSUPPORTED

    def fail_with(self, reason: Union[FailureReason, str], msg: Optional[str] = None) -> None:
        """
        Abort the current run.

        Raises:
            OperationFailure: always
        """
        raise OperationFailure(reason, msg)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _emit(self, channel: str, level: int, msg: str) -> None:
        if self.user_output is not None:
            getattr(self.user_output, channel)(msg)
        else:
            self.log.log(level, msg)

    def print_status(self, msg: str = "") -> None:
        self._emit("print_status", logging.INFO, msg)

    def print_good(self, msg: str = "") -> None:
        self._emit("print_good", logging.INFO, msg)

    def print_error(self, msg: str = "") -> None:
        self._emit("print_error", logging.ERROR, msg)

    def print_warning(self, msg: str = "") -> None:
        self._emit("print_warning", logging.WARNING, msg)

    def print_line(self, msg: str = "") -> None:
        self._emit("print_line", logging.INFO, msg)

    def _verbose(self) -> bool:
        return queries.flag_enabled(self.datastore.get(VERBOSE))

    def vprint_status(self, msg: str = "") -> None:
        if self._verbose():
            self.print_status(msg)

    def vprint_good(self, msg: str = "") -> None:
        if self._verbose():
            self.print_good(msg)

    def vprint_error(self, msg: str = "") -> None:
        if self._verbose():
            self.print_error(msg)

    def vprint_warning(self, msg: str = "") -> None:
        if self._verbose():
            self.print_warning(msg)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} uuid={self.uuid}>"
