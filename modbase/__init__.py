"""
modbase - Base execution unit for plugin-style security-testing modules

Every loadable capability ("module") is described by metadata, carries a
per-instance configuration store, and is replicated at invocation time so
concurrent or repeated executions never share mutable state.

Architecture:
- Each component is self-contained with a clear interface
- Components are replaceable behind their interfaces
- Replication is the only sanctioned way to get a concurrently usable instance

Components:
- descriptor: Static module metadata and defaulting
- datastore: Per-instance configuration store
- options: Option-system collaborator contract
- extensions: Declarative capability extensions
- module: The composed module instance, lineage and capability queries
- ui: Input/output channels
"""

__version__ = "1.0.0"
