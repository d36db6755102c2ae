"""c2rust-clean: run and remember a project's build-artifact clean command."""

__version__ = "0.1.0"
