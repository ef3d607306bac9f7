"""Integrations subpackage for property-tree.

- ``_pytest_plugin``: pytest fixtures, auto-registered through the ``pytest11``
  entry point when the package is installed.
"""
