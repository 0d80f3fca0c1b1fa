"""
Error taxonomy for plan generation and export.

Nothing here is retried: every failure is deterministic for a given input, so
the remedy is always to correct the input or regenerate the plan.
"""


class JetlagError(Exception):
    """Base class for all jetlag plan errors."""


class InvalidTripError(JetlagError, ValueError):
    """Trip input is unusable: unknown timezone, naive or inverted timestamps."""


class ExportError(JetlagError):
    """A plan could not be serialized to a calendar document."""


class PlanDecodeError(JetlagError):
    """Stored plan text is malformed, truncated or does not match the schema."""
