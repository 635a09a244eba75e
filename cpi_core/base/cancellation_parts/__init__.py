"""Implementation modules behind ``cpi_core.base.cancellation``."""
