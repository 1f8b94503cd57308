"""A spec file that fails to import."""

raise ImportError("this spec file is broken")
