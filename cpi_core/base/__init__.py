"""Base layer of the resilient operation core.

Import from the submodules (``cancellation``, ``errors``, ``resilience``,
``resources``, ``logging``) or from the package root ``cpi_core``.
"""
